from src.vector.clustering import cluster_cards, cluster_key
from src.vector.embeddings import embed


def _members(clusters):
    return [set(members) for members in clusters.values()]


def test_near_duplicate_phrasing_clusters_together():
    items = [("c1", embed("launch mobile app")), ("c2", embed("launch mobile application"))]
    clusters = cluster_cards(items, 0.3)
    assert clusters == {"cluster-0": ["c1", "c2"]}


def test_unrelated_cards_stay_apart():
    items = [("c1", embed("renewable solar energy")), ("c2", embed("quarterly tax filing"))]
    clusters = cluster_cards(items, 0.3)
    assert clusters == {"cluster-0": ["c1"], "cluster-1": ["c2"]}


def test_empty_input_returns_empty_mapping():
    assert cluster_cards([], 0.5) == {}


def test_every_card_lands_in_exactly_one_cluster():
    texts = [
        "solar panels",
        "solar panel installation",
        "quarterly tax filing",
        "launch mobile app",
        "launch mobile application",
        "Deforestation tracking",
        "Forest restoration monitoring",
        "the and for",
    ]
    items = [(f"c{i}", embed(text)) for i, text in enumerate(texts)]
    clusters = cluster_cards(items, 0.3)

    assigned = [card_id for members in clusters.values() for card_id in members]
    assert sorted(assigned) == sorted(card_id for card_id, _ in items)
    assert len(assigned) == len(set(assigned))
    assert list(clusters) == [cluster_key(i) for i in range(len(clusters))]


def test_higher_threshold_refines_clusters():
    items = [
        ("c1", embed("solar panels")),
        ("c2", embed("solar panels")),
        ("c3", embed("solar panel installation")),
        ("c4", embed("quarterly tax filing")),
    ]
    strict = cluster_cards(items, 0.9)
    loose = cluster_cards(items, 0.2)

    assert _members(strict) == [{"c1", "c2"}, {"c3"}, {"c4"}]
    assert _members(loose) == [{"c1", "c2", "c3"}, {"c4"}]
    for group in _members(strict):
        assert any(group <= loose_group for loose_group in _members(loose))


def test_threshold_one_only_groups_identical_vectors():
    items = [
        ("a", embed("launch mobile app")),
        ("b", embed("launch mobile app")),
        ("c", embed("launch mobile application")),
    ]
    clusters = cluster_cards(items, 1.0)
    assert _members(clusters) == [{"a", "b"}, {"c"}]


def test_zero_vectors_become_singletons():
    items = [("z1", embed("the and")), ("z2", embed("for with")), ("s", embed("solar panels"))]
    clusters = cluster_cards(items, 0.3)
    assert len(clusters) == 3
    # the non-zero vector has the largest magnitude and seeds first
    assert clusters["cluster-0"] == ["s"]


def test_seed_is_highest_magnitude_vector():
    items = [("small", [0.1, 0.0]), ("large", [2.0, 0.1]), ("other", [0.0, 1.0])]
    clusters = cluster_cards(items, 0.5)
    assert clusters["cluster-0"] == ["large", "small"]
    assert clusters["cluster-1"] == ["other"]


def test_members_ordered_by_descending_similarity_to_seed():
    items = [("seed", [1.0, 0.0, 0.0]), ("far", [0.6, 0.8, 0.0]), ("near", [0.9, 0.1, 0.0])]
    clusters = cluster_cards(items, 0.5)
    assert clusters == {"cluster-0": ["seed", "near", "far"]}


def test_duplicate_ids_are_clustered_once():
    vector = embed("solar panels")
    clusters = cluster_cards([("c1", vector), ("c1", vector), ("c2", vector)], 0.3)
    assert clusters == {"cluster-0": ["c1", "c2"]}


def test_mismatched_dimensions_do_not_raise():
    clusters = cluster_cards([("a", [1.0, 0.0]), ("b", [1.0, 0.0, 0.0])], 0.1)
    assert _members(clusters) == [{"a"}, {"b"}] or _members(clusters) == [{"b"}, {"a"}]


def test_magnitudes_equal_up_to_rounding_keep_input_order():
    # second magnitude is 1 + 1e-15, a floating point tie with the first
    items = [("first", [1.0, 0.0]), ("second", [0.0, 1.0 + 1e-15])]
    clusters = cluster_cards(items, 0.5)
    assert clusters == {"cluster-0": ["first"], "cluster-1": ["second"]}


def test_normalized_embeddings_seed_in_input_order():
    texts = ["quarterly tax filing", "solar panel installation", "launch mobile application"]
    items = [(text, embed(text)) for text in texts]
    clusters = cluster_cards(items, 0.99)
    assert [members[0] for members in clusters.values()] == texts
