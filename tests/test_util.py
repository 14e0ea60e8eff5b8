import pytest

import screentype.util as util
from screentype.error import MiscError

# test util stuff


def testToLatin1():
    assert util.toLatin1("abc") == b"abc"
    assert util.toLatin1("café") == b"caf\xe9"
    assert util.toLatin1("€") == b"?"


def testFixNL():
    assert util.fixNL("a\r\nb\rc\nd") == "a\nb\nc\nd"


def testClamp():
    assert util.clamp(5, 0, 10) == 5
    assert util.clamp(-1, 0, 10) == 0
    assert util.clamp(11, 0, 10) == 10
    assert util.clamp(11) == 11
    assert util.clamp(-5, maxVal=3) == -5


def testStr2Int():
    assert util.str2int("42", 0) == 42
    assert util.str2int("x", 5) == 5
    assert util.str2int("-3", 0, 0, 10) == 0
    assert util.str2int("ff", 0, radix=16) == 255


def testStr2Float():
    assert util.str2float("1.5", 0.0) == 1.5
    assert util.str2float("", 2.0) == 2.0
    assert util.str2float("100", 0.0, 0.0, 50.0) == 50.0


def testCenterColumn():
    assert util.centerColumn("ACT ONE", 33) == 30
    assert util.centerColumn("X" * 80, 33) == 0


def testTextSize():
    assert abs(util.getTextHeight(12) - 4.2333) < 0.001
    assert abs(util.getTextWidth("ab", 0, 12) - 5.08) < 0.001


def testString():
    s = util.String("a")
    s += "bc"
    s += 1

    assert str(s) == "abc1"
    assert len(s) == 4


def testFiles(tmp_path):
    fn = str(tmp_path / "out.txt")

    util.writeToFile(fn, "hyvä")
    assert util.loadFile(fn) == "hyvä"
    assert util.loadFile(fn, binary=True) == "hyvä".encode("UTF-8")
    assert util.loadFile(fn, 2) == "hy"

    with pytest.raises(MiscError):
        util.loadFile(str(tmp_path / "missing.txt"))
