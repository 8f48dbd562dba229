from gru.utils.lists import List, String, new_list


def test_list_contains():
    items = new_list("foo", "bar", "qux")
    assert items.contains("foo")


def test_list_does_not_contain_missing():
    items = new_list("foo", "bar", "qux")
    assert not items.contains("baz")


def test_string_in_list():
    items = new_list("foo", "bar", "qux")
    s = String("foo")
    assert s.is_in_list(items)


def test_string_not_in_list():
    items = new_list("foo", "bar", "qux")
    assert String("nope").is_in_list(items) is False


def test_list_len():
    items = new_list("foo", "bar", "qux")
    assert len(items) == 3


def test_new_list_keeps_order():
    items = new_list("b", "a", "c")
    assert list(items) == ["b", "a", "c"]
    assert isinstance(items, List)


def test_empty_list():
    items = new_list()
    assert len(items) == 0
    assert not items.contains("")


def test_string_str():
    assert str(String("hello")) == "hello"