from fzcore.item import Item


def test_string_ptr():
    orig = "\x1b[34mfoo"
    text = "\x1b[34mbar"
    item = Item(text=text, orig_text=orig)
    assert item.as_string(True) == "foo"
    assert item.as_string(False) == orig
    assert item.as_string(True) == "foo"

    item.orig_text = None
    assert item.as_string(True) == text
    assert item.as_string(False) == text


def test_plain_item_keeps_index():
    item = Item(text="hello", index=7)
    assert item.as_string(True) == "hello"
    assert item.index == 7