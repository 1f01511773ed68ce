from graph import Word, build_graph, model_words


def test_word_letters_are_sorted_and_distinct():
    word = Word.from_text("yogis")
    assert word.letters == ("g", "i", "o", "s", "y")
    assert word.first == "y"
    assert word.last == "s"
    assert Word.from_text("banana").letters == ("a", "b", "n")


def test_model_words_keeps_order():
    texts = ["snack", "jowly", "yogis"]
    assert [word.text for word in model_words(texts)] == texts


def test_every_index_in_exactly_one_bucket():
    texts = ["jowly", "yogis", "snack", "wacky", "yogi", "sign", "lying"]
    graph = build_graph(texts)
    seen = [index for bucket in graph.buckets.values() for index in bucket]
    assert sorted(seen) == list(range(len(texts)))
    for letter, bucket in graph.buckets.items():
        assert all(graph.words[index].first == letter for index in bucket)
    assert graph.buckets["y"] == [1, 4]
    assert graph.buckets["s"] == [2, 5]


def test_successors_match_all_pairs_scan():
    texts = ["jowly", "yogis", "snack", "wacky", "yogi", "sign", "lying", "sly"]
    graph = build_graph(texts)
    for i, word in enumerate(graph.words):
        expected = [j for j, other in enumerate(graph.words) if word.last == other.first]
        assert graph.successors(i) == expected


def test_counts():
    graph = build_graph(["jowly", "yogis", "snack", "wacky", "yogi", "sign", "lying"])
    assert graph.node_count == 7
    # jowly, wacky -> yogis, yogi; yogis -> snack, sign
    assert graph.edge_count == 6
    assert graph.starting_with("q") == []


def test_empty_graph():
    graph = build_graph([])
    assert graph.node_count == 0
    assert graph.edge_count == 0
    assert graph.buckets == {}
