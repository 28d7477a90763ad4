"""Unit tests for repository language classification."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from repo_router.language_detection import (
    DetectionMethod,
    LanguageTag,
    RepositoryClassifier,
    classify,
)


class TestExtensionCounting:
    """Test counting source files by extension."""

    @pytest.fixture
    def classifier(self):
        """Create a classifier instance."""
        return RepositoryClassifier()

    def test_counts_each_language(self, classifier, repo_dir, build_tree):
        """Test every mapped extension lands in its language bucket."""
        build_tree(repo_dir, {
            "a.py": "", "b.go": "", "c.rs": "", "d.java": "",
            "e.rb": "", "f.php": "", "g.swift": "",
        })
        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.PYTHON] == 1
        assert counts[LanguageTag.GO] == 1
        assert counts[LanguageTag.RUST] == 1
        assert counts[LanguageTag.JAVA] == 1
        assert counts[LanguageTag.RUBY] == 1
        assert counts[LanguageTag.PHP] == 1
        assert counts[LanguageTag.SWIFT] == 1

    def test_javascript_extensions_sum(self, classifier, repo_dir, build_tree):
        """Test .js, .jsx, .ts and .tsx all count as JavaScript."""
        build_tree(repo_dir, {"a.js": "", "b.jsx": "", "c.ts": "", "d.tsx": ""})
        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.JAVASCRIPT] == 4

    def test_c_family_extensions_sum(self, classifier, repo_dir, build_tree):
        """Test C and C++ sources and headers count as C."""
        build_tree(repo_dir, {"a.c": "", "b.cpp": "", "c.cc": "", "d.h": "", "e.hpp": ""})
        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.C] == 5

    def test_counts_recursively(self, classifier, repo_dir, build_tree):
        """Test files in nested directories are counted."""
        build_tree(repo_dir, {
            "pkg/mod.py": "",
            "pkg/sub/deep/mod.py": "",
            "top.py": "",
        })
        assert classifier.count_extensions(repo_dir)[LanguageTag.PYTHON] == 3

    def test_bare_extension_file_counts(self, classifier, repo_dir, build_tree):
        """Test a file named exactly ``.py`` counts like ``*.py`` does."""
        build_tree(repo_dir, {".py": "", "sub/.go": ""})
        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.PYTHON] == 1
        assert counts[LanguageTag.GO] == 1
        assert classify(repo_dir) is LanguageTag.PYTHON

    def test_last_dot_wins(self, classifier, repo_dir, build_tree):
        """Test multi-dot names match on their final extension."""
        build_tree(repo_dir, {"bundle.min.js": "", "types.d.ts": "", "notes.py.txt": ""})
        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.JAVASCRIPT] == 2
        assert counts[LanguageTag.PYTHON] == 0

    def test_unmapped_extensions_ignored(self, classifier, repo_dir, build_tree):
        """Test files outside the extension table do not count."""
        build_tree(repo_dir, {"README.md": "", "Makefile": "", "data.json": "", "x.pyc": ""})
        counts = classifier.count_extensions(repo_dir)
        assert sum(counts.values()) == 0

    def test_extension_match_is_case_sensitive(self, classifier, repo_dir, build_tree):
        """Test upper-case suffixes are not matched."""
        build_tree(repo_dir, {"SCRIPT.PY": "", "Main.Java": ""})
        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.PYTHON] == 0
        assert counts[LanguageTag.JAVA] == 0

    def test_git_directory_excluded(self, classifier, repo_dir, build_tree):
        """Test nothing under .git influences the counts."""
        build_tree(repo_dir, {
            ".git/hooks/pre-commit.py": "",
            ".git/info/exclude.rb": "",
            "main.go": "",
        })
        objects = repo_dir / ".git" / "objects" / "ab"
        objects.mkdir(parents=True)
        for i in range(2000):
            (objects / f"{i:038x}").write_text("")

        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.PYTHON] == 0
        assert counts[LanguageTag.RUBY] == 0
        assert counts[LanguageTag.GO] == 1

    def test_nested_git_directory_excluded(self, classifier, repo_dir, build_tree):
        """Test a submodule's .git directory is skipped too."""
        build_tree(repo_dir, {
            "vendor/lib/.git/hooks/a.py": "",
            "vendor/lib/b.py": "",
        })
        assert classifier.count_extensions(repo_dir)[LanguageTag.PYTHON] == 1

    def test_extra_exclude_patterns(self, repo_dir, build_tree):
        """Test caller-supplied patterns prune directories."""
        build_tree(repo_dir, {"node_modules/x/index.js": "", "app.py": ""})
        classifier = RepositoryClassifier(exclude_patterns=["node_modules/"])
        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.JAVASCRIPT] == 0
        assert counts[LanguageTag.PYTHON] == 1

    def test_symlinks_not_counted(self, classifier, repo_dir, build_tree, tmp_path):
        """Test symbolic links are neither counted nor followed."""
        outside = build_tree(tmp_path / "outside", {"a.py": "", "b.py": ""})
        build_tree(repo_dir, {"real.go": ""})
        (repo_dir / "linked_dir").symlink_to(outside, target_is_directory=True)
        (repo_dir / "link.py").symlink_to(outside / "a.py")

        counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.PYTHON] == 0
        assert counts[LanguageTag.GO] == 1

    def test_unreadable_directory_counts_zero(self, classifier, repo_dir, build_tree):
        """Test a directory that cannot be listed contributes nothing."""
        build_tree(repo_dir, {"locked/a.py": "", "locked/b.py": "", "open/c.py": ""})
        original_iterdir = Path.iterdir

        def iterdir(self):
            if self.name == "locked":
                raise PermissionError("denied")
            return original_iterdir(self)

        with patch.object(Path, "iterdir", iterdir):
            counts = classifier.count_extensions(repo_dir)
        assert counts[LanguageTag.PYTHON] == 1


class TestMarkerFiles:
    """Test marker file bonuses."""

    @pytest.fixture
    def classifier(self):
        return RepositoryClassifier()

    @pytest.mark.parametrize(
        "marker,language",
        [
            ("package.json", LanguageTag.JAVASCRIPT),
            ("requirements.txt", LanguageTag.PYTHON),
            ("setup.py", LanguageTag.PYTHON),
            ("pyproject.toml", LanguageTag.PYTHON),
            ("go.mod", LanguageTag.GO),
            ("Cargo.toml", LanguageTag.RUST),
            ("pom.xml", LanguageTag.JAVA),
            ("build.gradle", LanguageTag.JAVA),
            ("Gemfile", LanguageTag.RUBY),
            ("composer.json", LanguageTag.PHP),
            ("Package.swift", LanguageTag.SWIFT),
        ],
    )
    def test_marker_adds_bonus(self, classifier, repo_dir, marker, language):
        """Test each marker file adds 10 to its language."""
        (repo_dir / marker).write_text("")
        scores = classifier.apply_markers(repo_dir, {tag: 0 for tag in LanguageTag.scored()})
        assert scores[language] == 10

    def test_each_present_marker_adds_its_own_bonus(self, classifier, repo_dir, build_tree):
        """Test several Python markers stack."""
        build_tree(repo_dir, {"requirements.txt": "", "setup.py": "", "pyproject.toml": ""})
        scores = classifier.score(repo_dir)
        # setup.py is also a .py file
        assert scores[LanguageTag.PYTHON] == 31

    def test_marker_only_counts_at_root(self, classifier, repo_dir, build_tree):
        """Test a marker in a subdirectory gives no bonus."""
        build_tree(repo_dir, {"sub/Cargo.toml": ""})
        assert classifier.score(repo_dir)[LanguageTag.RUST] == 0

    def test_marker_directory_ignored(self, classifier, repo_dir):
        """Test a directory named like a marker gives no bonus."""
        (repo_dir / "go.mod").mkdir()
        assert classifier.score(repo_dir)[LanguageTag.GO] == 0


class TestLeaderSelection:
    """Test picking the winning language."""

    def test_marker_beats_few_files(self, repo_dir, build_tree):
        """Test Cargo.toml (10) outweighs a single Ruby file (1)."""
        build_tree(repo_dir, {"script.rb": "", "Cargo.toml": ""})
        assert classify(repo_dir) is LanguageTag.RUST

    def test_tie_goes_to_earlier_language(self, repo_dir, build_tree):
        """Test one .py and one .go file yields Python."""
        build_tree(repo_dir, {"a.py": "", "b.go": ""})
        assert classify(repo_dir) is LanguageTag.PYTHON

    def test_later_language_needs_strictly_greater(self, repo_dir, build_tree):
        """Test Swift must beat Ruby outright to win."""
        build_tree(repo_dir, {"a.rb": "", "b.rb": "", "c.swift": "", "d.swift": ""})
        assert classify(repo_dir) is LanguageTag.RUBY

        (repo_dir / "e.swift").write_text("")
        assert classify(repo_dir) is LanguageTag.SWIFT

    def test_highest_count_wins(self, repo_dir, build_tree):
        """Test the language with most files wins."""
        build_tree(repo_dir, {"a.py": "", "b.ts": "", "c.tsx": "", "d.js": ""})
        assert classify(repo_dir) is LanguageTag.JAVASCRIPT

    def test_empty_directory_is_other(self, repo_dir):
        """Test an empty repository yields Other."""
        result = RepositoryClassifier().detect(repo_dir)
        assert result.language is LanguageTag.OTHER
        assert result.method is DetectionMethod.DEFAULT
        assert result.scores.total == 0

    def test_only_unmapped_files_is_other(self, repo_dir, build_tree):
        """Test a repository of unmapped files yields Other."""
        build_tree(repo_dir, {"main.hs": "", "README.md": "", ".git/config": ""})
        assert classify(repo_dir) is LanguageTag.OTHER

    def test_missing_directory_is_other(self, tmp_path):
        """Test a path that does not exist yields Other without raising."""
        assert classify(tmp_path / "missing") is LanguageTag.OTHER

    def test_file_path_is_other(self, tmp_path):
        """Test a regular file path yields Other."""
        path = tmp_path / "file.py"
        path.write_text("")
        assert classify(path) is LanguageTag.OTHER

    def test_detection_is_idempotent(self, repo_dir, build_tree):
        """Test repeated classification gives the same answer."""
        build_tree(repo_dir, {"a.java": "", "b.java": "", "pom.xml": "", "c.py": ""})
        classifier = RepositoryClassifier()
        first = classifier.detect(repo_dir)
        second = classifier.detect(repo_dir)
        assert first.language is LanguageTag.JAVA
        assert first.language is second.language
        assert first.scores == second.scores

    def test_detect_reports_scores(self, repo_dir, build_tree):
        """Test the result carries the full score table."""
        build_tree(repo_dir, {"main.go": "", "go.mod": "", "util.go": "", "x.py": ""})
        result = RepositoryClassifier().detect(repo_dir)
        assert result.method is DetectionMethod.EXTENSION_COUNT
        assert result.scores.as_dict() == {
            "Python": 1, "Go": 12, "JavaScript": 0, "Rust": 0, "Java": 0,
            "C": 0, "Ruby": 0, "PHP": 0, "Swift": 0,
        }


class TestOverride:
    """Test caller-supplied language overrides."""

    @pytest.fixture
    def classifier(self):
        return RepositoryClassifier()

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("python", LanguageTag.PYTHON),
            ("py", LanguageTag.PYTHON),
            ("golang", LanguageTag.GO),
            ("ts", LanguageTag.JAVASCRIPT),
            ("TypeScript", LanguageTag.JAVASCRIPT),
            ("rs", LanguageTag.RUST),
            ("java", LanguageTag.JAVA),
            ("c++", LanguageTag.C),
            ("cpp", LanguageTag.C),
            ("rb", LanguageTag.RUBY),
            ("PHP", LanguageTag.PHP),
            ("swift", LanguageTag.SWIFT),
            ("other", LanguageTag.OTHER),
            ("  Go  ", LanguageTag.GO),
        ],
    )
    def test_aliases(self, classifier, value, expected):
        """Test alias normalization."""
        tag, warning = classifier.normalize_override(value)
        assert tag is expected
        assert warning is None

    def test_unknown_override_warns(self, classifier, repo_dir, caplog):
        """Test an unknown override falls back to Other with a warning."""
        with caplog.at_level(logging.INFO):
            result = classifier.detect(repo_dir, override="cobol")
        assert result.language is LanguageTag.OTHER
        assert result.method is DetectionMethod.OVERRIDE
        assert result.warning == "Unknown language 'cobol', using 'Other'"
        assert "cobol" in caplog.text
        # The warning travels on the result; the log line stays below WARNING
        assert all(record.levelno < logging.WARNING for record in caplog.records)

    def test_override_skips_scan(self, classifier, repo_dir, build_tree):
        """Test an override bypasses counting entirely."""
        build_tree(repo_dir, {"a.py": "", "b.py": "", "setup.py": ""})
        with patch.object(classifier, "count_extensions") as count:
            result = classifier.detect(repo_dir, override="rust")
        count.assert_not_called()
        assert result.language is LanguageTag.RUST
        assert result.overridden
        assert result.scores.total == 0

    def test_classify_with_override(self, repo_dir):
        """Test the module-level function honors the override."""
        assert classify(repo_dir, override="ts") is LanguageTag.JAVASCRIPT
