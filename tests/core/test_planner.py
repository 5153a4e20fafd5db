"""Tests for the relocation planner."""

from __future__ import annotations

import os
import random
from pathlib import Path

import pytest

from adcloak.core.models import LookupEntry
from adcloak.core.planner import RelocationPlanner
from adcloak.utils.paths import normalize_path, split_segments

PLUGINS = Path("/srv/plugins")


def _scan(*relative_paths: str, mtime: int = 100) -> dict[str, int]:
    return {normalize_path(os.path.abspath(PLUGINS / path)): mtime for path in relative_paths}


@pytest.fixture
def planner(rng: random.Random) -> RelocationPlanner:
    return RelocationPlanner(rng=rng)


def _relocated(plan) -> dict[str, str]:
    return {entry.original_path: entry.relocated_path for entry in plan.entries}


class TestPlan:
    """Path randomization rules."""

    def test_allow_listed_segments_keep_their_name(self, planner: RelocationPlanner) -> None:
        # When
        plan = planner.plan(_scan("advanced-ads/public/assets/js/advanced.js"), PLUGINS)

        # Then: only the extension directory is randomized
        relocated = split_segments(_relocated(plan)["advanced-ads/public/assets/js/advanced.js"])
        assert relocated[1:] == ["public", "assets", "js", "advanced.js"]
        assert relocated[0] != "advanced-ads"
        assert relocated[0].isdigit()

    def test_shared_directory_gets_one_name(self, planner: RelocationPlanner) -> None:
        # Given: two files in the same directory
        scan = _scan("ext/modules/a.js", "ext/modules/b.js")

        # When
        relocated = _relocated(planner.plan(scan, PLUGINS))

        # Then: both share the randomized directory prefix
        a = split_segments(relocated["ext/modules/a.js"])
        b = split_segments(relocated["ext/modules/b.js"])
        assert a[:2] == b[:2]
        assert a[2] != b[2]

    def test_scripts_and_styles_are_renamed_images_are_not(self, planner: RelocationPlanner) -> None:
        relocated = _relocated(planner.plan(_scan("ext/img/logo.png", "ext/img/logo.css"), PLUGINS))

        assert relocated["ext/img/logo.png"].endswith("/logo.png")
        css_name = split_segments(relocated["ext/img/logo.css"])[-1]
        assert css_name.endswith(".css")
        assert css_name != "logo.css"

    def test_names_unique_within_run(self, planner: RelocationPlanner) -> None:
        # Given: many files in one directory
        scan = _scan(*(f"ext/f{i}.js" for i in range(50)))

        # When
        names = [split_segments(path)[-1] for path in _relocated(planner.plan(scan, PLUGINS)).values()]

        # Then
        assert len(set(names)) == 50

    def test_entries_sorted_by_original_path(self, planner: RelocationPlanner) -> None:
        plan = planner.plan(_scan("ext/b.js", "ext/a.js", "ext/c.js"), PLUGINS)

        assert [entry.original_path for entry in plan.entries] == ["ext/a.js", "ext/b.js", "ext/c.js"]

    def test_custom_allow_list(self, rng: random.Random) -> None:
        planner = RelocationPlanner(do_not_rename=["ext"], rng=rng)

        relocated = _relocated(planner.plan(_scan("ext/js/a.js"), PLUGINS))

        assert split_segments(relocated["ext/js/a.js"])[0] == "ext"
        # "js" is not on the custom list
        assert split_segments(relocated["ext/js/a.js"])[1] != "js"


class TestPlanWithHistory:
    """Reuse of names from a previous lookup table."""

    def test_prior_names_are_reused(self, planner: RelocationPlanner) -> None:
        # Given: a previous run relocated ext/modules/a.js
        prior = {"ext/modules/a.js": LookupEntry(relocated_path="17/230/5.js", mtime=1)}

        # When: a sibling file is added
        relocated = _relocated(planner.plan(_scan("ext/modules/b.js"), PLUGINS, prior))

        # Then: the directories keep their previous names
        b = split_segments(relocated["ext/modules/b.js"])
        assert b[:2] == ["17", "230"]
        assert b[2] != "5.js"

    def test_changed_file_keeps_its_name(self, planner: RelocationPlanner) -> None:
        prior = {"ext/a.js": LookupEntry(relocated_path="17/5.js", mtime=1)}

        relocated = _relocated(planner.plan(_scan("ext/a.js", mtime=2), PLUGINS, prior))

        assert relocated["ext/a.js"] == "17/5.js"

    def test_force_rename_all_ignores_history(self, mocker) -> None:
        # Given: a random source drawing 42, then 43
        fixed = mocker.Mock(spec=random.Random)
        fixed.randint.side_effect = [42, 43]
        planner = RelocationPlanner(rng=fixed)
        prior = {"ext/a.js": LookupEntry(relocated_path="17/5.js", mtime=1)}

        # When
        relocated = _relocated(planner.plan(_scan("ext/a.js"), PLUGINS, prior, force_rename_all=True))

        # Then: fresh names are allocated
        assert relocated["ext/a.js"] == "42/43.js"

    def test_seed_segment_map(self, planner: RelocationPlanner) -> None:
        # Given
        prior = {
            "ext/public/a.js": LookupEntry(relocated_path="17/public/5.js", mtime=1),
            "broken/x.js": LookupEntry(relocated_path="1.js", mtime=1),
        }

        # When
        segment_map, used = planner.seed_segment_map(prior)

        # Then: identical segments are only marked as used, malformed entries ignored
        assert segment_map == {"ext": "17", "a.js": "5.js"}
        assert used == {"17", "public", "5.js"}
