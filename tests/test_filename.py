import pytest

from asmcore.util.filename import (
    STD_PATH_PREFIX,
    FilenameError,
    filename_navigate,
    is_std_path,
)


def test_is_std_path():
    assert is_std_path(STD_PATH_PREFIX + "cpu/x.asm")
    assert not is_std_path("cpu/x.asm")


def test_navigate_sibling():
    assert filename_navigate("src/main.asm", "lib.asm") == "src/lib.asm"


def test_navigate_parent():
    assert filename_navigate("src/main.asm", "../x.asm") == "x.asm"


def test_navigate_absolute():
    assert filename_navigate("src/main.asm", "/a/b.asm") == "a/b.asm"


def test_navigate_collapses_dots_and_empty_parts():
    assert filename_navigate("src/main.asm", "./inc//a.asm") == "src/inc/a.asm"


def test_navigate_backslashes():
    assert filename_navigate("src\\main.asm", "inc\\a.asm") == "src/inc/a.asm"


def test_navigate_std_path_unchanged():
    nav = STD_PATH_PREFIX + "lib.asm"
    assert filename_navigate("src/main.asm", nav) == nav


def test_navigate_out_of_project():
    with pytest.raises(FilenameError, match="out of project directory") as info:
        filename_navigate("main.asm", "../x.asm", span="loc")
    assert info.value.span == "loc"