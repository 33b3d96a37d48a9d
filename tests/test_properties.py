# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Property-based tests for gh-release.

Uses hypothesis to generate random inputs and verify invariants hold
across all valid cases.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from gh_release.classify import BumpKind, classify_message, integration_merge_matcher
from gh_release.refs import normalize_ref
from gh_release.version import next_version

version_number = st.integers(min_value=0, max_value=9999)

owner_name = st.from_regex(r"[A-Za-z0-9][A-Za-z0-9-]{0,38}", fullmatch=True)

random_text = st.text(
    alphabet=st.characters(whitelist_categories=("L", "N", "P", "S", "Zs")),
    min_size=0,
    max_size=60,
)


@st.composite
def version_triple(draw: st.DrawFn) -> tuple[int, int, int]:
    """Generate MAJOR.MINOR.PATCH triples."""
    return draw(version_number), draw(version_number), draw(version_number)


class TestRefNormalization:
    """Properties of normalize_ref()."""

    @settings(max_examples=100)
    @given(rest=random_text)
    def test_prefix_removed_exactly_once(self, rest: str) -> None:
        assert normalize_ref("refs/" + rest) == rest

    @settings(max_examples=100)
    @given(ref=random_text)
    def test_unprefixed_unchanged(self, ref: str) -> None:
        if not ref.startswith("refs/"):
            assert normalize_ref(ref) == ref


class TestVersionIncrement:
    """Properties of next_version()."""

    @settings(max_examples=100)
    @given(parts=version_triple())
    def test_minor_resets_patch(self, parts: tuple[int, int, int]) -> None:
        major, minor, patch = parts
        assert next_version(f"{major}.{minor}.{patch}", BumpKind.MINOR) == f"{major}.{minor + 1}.0"

    @settings(max_examples=100)
    @given(parts=version_triple())
    def test_patch_increments_patch_only(self, parts: tuple[int, int, int]) -> None:
        major, minor, patch = parts
        assert next_version(f"{major}.{minor}.{patch}", BumpKind.PATCH) == f"{major}.{minor}.{patch + 1}"


class TestClassification:
    """Properties of the default integration matcher."""

    @settings(max_examples=100)
    @given(owner=owner_name, prefix=random_text, body=random_text)
    def test_develop_suffix_is_minor(self, owner: str, prefix: str, body: str) -> None:
        message = f"{prefix}{owner}/develop\n{body}"
        assert classify_message(message, integration_merge_matcher(owner)) is BumpKind.MINOR

    @settings(max_examples=100)
    @given(owner=owner_name, line=random_text)
    def test_other_suffix_is_patch(self, owner: str, line: str) -> None:
        if not line.endswith(f"{owner}/develop"):
            assert classify_message(line, integration_merge_matcher(owner)) is BumpKind.PATCH
