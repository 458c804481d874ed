from commonitor.about import about_text, name_and_version


def test_name_and_version():
    assert name_and_version() == "Com Monitor 1.20"


def test_about_text_starts_with_name():
    assert about_text().splitlines()[0] == name_and_version()


def test_about_text_mentions_limits_and_defaults():
    text = about_text()
    assert "1048576" in text
    assert "9600" in text
    assert "10ms~60000ms" in text


def test_about_text_sections_in_order():
    text = about_text()
    positions = [text.index(title) for title in ("软件说明:", "软件参数:", "使用帮助:", "其它:")]
    assert positions == sorted(positions)


def test_about_text_ends_with_newline():
    assert about_text().endswith("\n")