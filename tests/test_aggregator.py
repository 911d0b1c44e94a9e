from conftest import make_match
from mention_digest.search.aggregator import aggregate_channels, placeholder_channel_name


def test_duplicates_collapse_to_one_entry_per_channel():
    matches = [
        make_match("C1", "general"),
        make_match("C2", "random"),
        make_match("C1", "general"),
        make_match("C3", "dev"),
        make_match("C2", "random"),
    ]

    result = aggregate_channels(matches)

    ids = [ch.id for ch in result.channels]
    assert len(ids) == 3
    assert sorted(ids) == ["C1", "C2", "C3"]


def test_output_is_sorted_by_name_regardless_of_input_order():
    forward = aggregate_channels([make_match("2", "b"), make_match("1", "a")])
    backward = aggregate_channels([make_match("1", "a"), make_match("2", "b")])

    assert [ch.name for ch in forward.channels] == ["a", "b"]
    assert forward.channels == backward.channels


def test_missing_name_uses_placeholder():
    result = aggregate_channels([make_match("G123")])

    assert result.channels[0].name == "private-channel-G123"
    assert placeholder_channel_name("G123") == "private-channel-G123"


def test_empty_name_uses_placeholder():
    result = aggregate_channels([make_match("G9", "")])

    assert result.channels[0].name == "private-channel-G9"


def test_matches_without_channel_id_are_skipped():
    result = aggregate_channels([make_match(None), make_match(None, "orphan"), make_match("C1", "ok")])

    assert [ch.id for ch in result.channels] == ["C1"]
    assert result.skipped == 2


def test_last_seen_name_wins_for_same_id():
    result = aggregate_channels([make_match("C1", "old-name"), make_match("C1", "new-name")])

    assert len(result.channels) == 1
    assert result.channels[0].name == "new-name"


def test_sort_ignores_accents_and_case():
    result = aggregate_channels([
        make_match("1", "zeta"),
        make_match("2", "Éclair"),
        make_match("3", "apple"),
        make_match("4", "Banana"),
    ])

    assert [ch.name for ch in result.channels] == ["apple", "Banana", "Éclair", "zeta"]


def test_empty_input():
    result = aggregate_channels([])

    assert result.channels == []
    assert result.skipped == 0
