"""
Tests for latest-version selection (semtag/selector.py).

Tests the parse/filter/reduce pipeline over noisy, unordered input.
"""

import random

from semtag.selector import find_latest, max_version, parse_candidate, select_latest
from semtag.semver import SemVer


class TestParseCandidate:
    """Tests for the per-line map step"""

    def test_valid_line_is_trimmed(self):
        """Test that surrounding whitespace is ignored"""
        assert parse_candidate("  \tv1.2.3\r ", stable_only=False) == SemVer(1, 2, 3)

    def test_invalid_line_becomes_zero(self):
        """Test that unparseable lines are substituted with the zero version"""
        assert parse_candidate("invalid", stable_only=False).is_zero()

    def test_unstable_line_becomes_zero_when_stable_only(self):
        """Test that prereleases are dropped from stable search"""
        assert parse_candidate("1.2.3-rc1", stable_only=True).is_zero()
        assert parse_candidate("1.2.3-rc1", stable_only=False) == SemVer(1, 2, 3, "-rc1")

    def test_trailing_whitespace_is_not_info(self):
        """Test that trimming happens before parsing"""
        assert parse_candidate("1.2.3   ", stable_only=True) == SemVer(1, 2, 3)


class TestMaxVersion:
    """Tests for the reduction"""

    def test_empty_returns_zero(self):
        """Test that no versions reduce to the zero version"""
        assert max_version([]).is_zero()

    def test_single_version(self):
        """Test that a single version is returned"""
        assert max_version([SemVer(0, 0, 1)]) == SemVer(0, 0, 1)

    def test_numeric_not_lexicographic(self):
        """Test that minor/patch compare as numbers"""
        versions = [SemVer(0, 9, 0), SemVer(0, 10, 0), SemVer(0, 2, 99)]
        assert max_version(versions) == SemVer(0, 10, 0)


class TestFindLatest:
    """Tests for find_latest over newline-separated text"""

    def test_ascending_v_prefixed_stable(self):
        """Test a simple ascending list of v-prefixed tags"""
        text = "\n".join([
            "v0.1.0", "v0.2.0", "v0.2.1", "v0.2.2", "v0.2.3",
            "v0.2.4", "v0.2.5", "v1.0.0", "v1.0.1",
        ])
        assert find_latest(text, stable_only=True).render() == "1.0.1"

    def test_double_digits_stable(self):
        """Test skipped versions with double digits"""
        text = "\n".join([
            "v0.3.0", "v0.10.0", "v0.11.5", "v0.11.27", "v1.2.3",
            "v3.2.1", "v3.3.333", "v3.4.0", "v3.4.1",
        ])
        assert find_latest(text, stable_only=True).render() == "3.4.1"

    def test_chaotic_order_stable(self):
        """Test unordered tags, some with info and some without a v prefix"""
        text = "\n".join([
            "v3.12.3", "11.0.77-i11", "v0.10.1-rc2", "1.234.20-info3",
            "v0.0.0-initial", "0.2.4", "v0.2.5",
        ])
        assert find_latest(text, stable_only=True).as_tuple() == (3, 12, 3, None)

    def test_invalid_and_unstable_lines_stable(self):
        """Test that invalid lines and prereleases are skipped"""
        text = "\n".join([
            "v1.9.12-alpha", "v0.02.0005", "invalid version", "0.00.000-test",
            "5.0.022-rc12+build5", "0.11.2",
        ])
        assert find_latest(text, stable_only=True).as_tuple() == (0, 11, 2, None)

    def test_prereleases_allowed(self):
        """Test that prereleases compete when stable_only is False"""
        text = "\n".join([
            "81.2.abc-test", "v2.07.00001-info", "1.1.1", "v0.0.0-init",
            "5.007.06-rc3", "invalid", "005.6.7-blah",
        ])
        assert find_latest(text, stable_only=False).as_tuple() == (5, 7, 6, "-rc3")

    def test_stable_precedence_with_whitespace(self):
        """Test stable-over-prerelease precedence with messy whitespace"""
        lines = [
            "\r0.5.1\n", "0.5.10-unstable\n  ", "\t1.0.1-rc51\n", "  \n\n 1.0.1",
            "\ninvalid ", " 0.2.1-blah \r\n ",
        ]
        assert find_latest("\n".join(lines), stable_only=False).as_tuple() == (1, 0, 1, None)

    def test_stable_beats_release_candidate(self):
        """Test that 1.0.0 outranks 1.0.0-rc1"""
        assert find_latest("1.0.0-rc1\n1.0.0", stable_only=False).render() == "1.0.0"
        assert find_latest("1.0.0\n1.0.0-rc1", stable_only=False).render() == "1.0.0"

    def test_info_tie_break(self):
        """Test lexicographic info tie-break"""
        assert find_latest("1.0.0-abd\n1.0.0-abc", stable_only=False).render() == "1.0.0-abd"

    def test_all_invalid(self):
        """Test that all-invalid input yields 0.0.0"""
        version = find_latest("invalid\n123abc\n#!!", stable_only=False)
        assert version.is_zero()
        assert version.render() == "0.0.0"

    def test_only_prereleases_stable(self):
        """Test that stable search over prereleases only yields 0.0.0"""
        assert find_latest("1.2.3-rc1\n1.2.4-beta", stable_only=True).is_zero()

    def test_empty_text(self):
        """Test that empty input yields 0.0.0"""
        assert find_latest("", stable_only=False).is_zero()
        assert find_latest("\n\n  \n", stable_only=True).is_zero()

    def test_literal_zero_is_dropped(self):
        """Test that a literal 0.0.0 does not count as a version"""
        assert find_latest("0.0.0\nnot a tag", stable_only=False).is_zero()

    def test_zero_with_info_alone(self):
        """Test that 0.0.0 with info loses to the zero seed"""
        assert find_latest("v0.0.0-initial", stable_only=False).is_zero()

    def test_order_independent(self):
        """Test that shuffling the input never changes the result"""
        lines = [
            "v2.0.0-rc1", "v2.0.0-rc2", "v1.9.9", "v2.0.0-beta", "junk",
            "v0.1.0", "2.0.0-rc10", "v1.10.0",
        ]
        expected = find_latest("\n".join(lines), stable_only=False)
        assert expected.render() == "2.0.0-rc2"

        rng = random.Random(42)
        for _ in range(25):
            rng.shuffle(lines)
            assert find_latest("\n".join(lines), stable_only=False) == expected
            assert find_latest("\n".join(lines), stable_only=True).render() == "1.10.0"

    def test_windows_line_endings(self):
        """Test CRLF output is handled by trimming"""
        assert find_latest("v1.0.0\r\nv1.1.0\r\n", stable_only=True).render() == "1.1.0"


class TestSelectLatest:
    """Tests for select_latest over pre-split candidates"""

    def test_select_from_list(self):
        """Test selecting from a list of strings"""
        assert select_latest(["v1.0.0", "v1.0.1-rc1", "nope"]).render() == "1.0.1-rc1"
        assert select_latest(["v1.0.0", "v1.0.1-rc1", "nope"], stable_only=True).render() == "1.0.0"

    def test_select_from_generator(self):
        """Test that any iterable is accepted"""
        tags = (f"v1.{minor}.0" for minor in range(12))
        assert select_latest(tags).render() == "1.11.0"
