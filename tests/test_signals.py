# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Signal extraction and roadmap path matching tests."""

from __future__ import annotations

import pytest

from roadmap_priority.signals.extractor import (
    dependency_signals,
    extract_signals,
    keyword_signals,
    label_signals,
    milestone_signals,
    milestone_weight,
)
from roadmap_priority.signals.models import IssueMetadata, SignalCategory, parse_label_list
from roadmap_priority.signals.roadmap import is_roadmap_factor, match_roadmap_paths


class TestLabelSignals:
    def test_scope_and_type_labels(self):
        signals = label_signals(parse_label_list("scope:core, feature"))
        assert [s.weight for s in signals] == [100, 50]
        assert signals[0].label == "Scope core: +100"
        assert signals[1].label == "Type feature: +50"
        assert all(s.category == SignalCategory.LABEL for s in signals)

    def test_unrecognized_labels_ignored(self):
        assert label_signals(parse_label_list("wontfix, good first issue")) == []

    def test_order_follows_table_not_input(self):
        a = label_signals(parse_label_list("feature,scope:core"))
        b = label_signals(parse_label_list("scope:core,feature"))
        assert a == b

    def test_type_prefix_and_case(self):
        signals = label_signals(parse_label_list("Scope:World, type:Refactor"))
        assert [s.label for s in signals] == ["Scope world: +80", "Type refactor: +20"]

    def test_devx_is_weaker_than_core(self):
        core = label_signals(parse_label_list("scope:core"))[0].weight
        devx = label_signals(parse_label_list("scope:devx"))[0].weight
        assert devx < core


class TestMilestoneSignals:
    @pytest.mark.parametrize("milestone,expected", [("M0", 120), ("m1", 110), ("M3 Traversal", 90), ("M15", 0)])
    def test_weights_decrease_with_distance(self, milestone, expected):
        assert milestone_weight(milestone) == expected

    def test_monotonic(self):
        weights = [milestone_weight(f"M{i}") for i in range(8)]
        assert weights == sorted(weights, reverse=True)

    @pytest.mark.parametrize("milestone", ["", "   ", "Backlog", "Someday"])
    def test_missing_or_unknown_contributes_nothing(self, milestone):
        assert milestone_weight(milestone) is None
        assert milestone_signals(milestone) == []


class TestKeywordSignals:
    def test_foundational_keywords_accumulate(self):
        signals = keyword_signals("Core Database Foundation", "persistence layer")
        assert len(signals) == 1
        assert signals[0].weight == 45
        assert "foundation" in signals[0].label and "persistence" in signals[0].label

    def test_keyword_stuffing_is_capped(self):
        text = "foundation persistence core bootstrap prerequisite essential blocker"
        signals = keyword_signals(text, text * 5)
        assert signals[0].weight == 45

    def test_polish_keywords_negative_and_capped(self):
        signals = keyword_signals("Documentation Polish", "Polish documentation, fix typos, cleanup wording")
        assert len(signals) == 1
        assert signals[0].weight == -30

    def test_case_insensitive(self):
        assert keyword_signals("FOUNDATION", "")[0].weight == 15

    def test_both_sets_in_fixed_order(self):
        signals = keyword_signals("core typo", "")
        assert [s.weight for s in signals] == [15, -10]


class TestDependencySignals:
    def test_blocked_by_other_issue(self):
        signals = dependency_signals("Hook up telemetry", "Depends on #12 landing first")
        assert [(s.label, s.weight) for s in signals] == [("Blocked by other issues: +10", 10)]
        assert signals[0].category == SignalCategory.DEPENDENCY

    def test_blocker_outweighs_blocked(self):
        signals = dependency_signals("Schema", "Blocks #40 and #41")
        assert [(s.label, s.weight) for s in signals] == [("Blocks other issues: +25", 25)]

    def test_prerequisite_for_marks_blocker(self):
        signals = dependency_signals("Auth", "Blocked by #3; this is a prerequisite for the login flow")
        assert signals[0].weight == 25

    def test_blocking_phrase_alone_is_not_a_dependency(self):
        assert dependency_signals("Storage", "Foundation for later work") == []

    def test_single_signal_for_many_references(self):
        signals = dependency_signals("X", "depends on #1, depends on #2, blocked by #3")
        assert len(signals) == 1


class TestExtractSignals:
    def test_category_order(self):
        meta = IssueMetadata(
            number=1,
            title="Core polish",
            description="",
            labels=["feature"],
            milestone="M1",
        )
        categories = [s.category for s in extract_signals(meta)]
        assert categories == [
            SignalCategory.LABEL,
            SignalCategory.MILESTONE,
            SignalCategory.KEYWORD,
            SignalCategory.KEYWORD,
        ]

    def test_dependency_after_keywords(self):
        meta = IssueMetadata(number=1, title="Core", description="blocked by #9", labels=["feature"])
        categories = [s.category for s in extract_signals(meta)]
        assert categories == [SignalCategory.LABEL, SignalCategory.KEYWORD, SignalCategory.DEPENDENCY]

    def test_deterministic(self):
        meta = IssueMetadata(
            number=7,
            title="Navigation Foundation Work",
            description="core location vertex",
            labels=["scope:core", "feature", "unknown"],
            milestone="M0",
        )
        first = extract_signals(meta)
        for _ in range(5):
            assert extract_signals(meta) == first

    def test_empty_metadata_yields_no_signals(self):
        assert extract_signals(IssueMetadata(number=1)) == []


class TestRoadmapPaths:
    def test_matches_description_phrases(self):
        signals = match_roadmap_paths("Implement core location vertex and exit edge persistence using Gremlin API")
        labels = [s.label for s in signals]
        assert labels == [
            "Roadmap path: gremlin (+40)",
            "Roadmap path: vertex (+30)",
            "Roadmap path: exit edge (+30)",
            "Roadmap path: location (+15)",
        ]
        assert all(is_roadmap_factor(l) for l in labels)
        assert all(s.category == SignalCategory.ROADMAP_PATH for s in signals)

    def test_repeated_phrase_counts_once(self):
        signals = match_roadmap_paths("gremlin gremlin GREMLIN")
        assert len(signals) == 1
        assert signals[0].weight == 40

    def test_no_match(self):
        assert match_roadmap_paths("Polish documentation and fix typos") == []
        assert match_roadmap_paths("") == []

    def test_title_is_not_scanned(self):
        meta = IssueMetadata(number=1, title="Gremlin vertex work", description="nothing here")
        assert match_roadmap_paths(meta.description) == []


class TestIssueMetadata:
    def test_rejects_non_positive_number(self):
        with pytest.raises(ValueError):
            IssueMetadata(number=0)

    def test_rejects_non_positive_existing_order(self):
        with pytest.raises(ValueError):
            IssueMetadata(number=1, existing_order=0)

    def test_labels_normalized(self):
        meta = IssueMetadata(number=1, labels=[" Scope:Core ", "", "Feature"])
        assert meta.labels == frozenset({"scope:core", "feature"})
