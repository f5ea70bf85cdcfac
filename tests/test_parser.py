import pytest

from gpbo.parser import Expression, parse_expression
from gpbo.errors import StructureError, ParseError


def test_single_name():
    e = parse_expression("kSEISO")
    assert e == Expression("kSEISO")
    assert e.args == ()


def test_nested_expression_and_whitespace():
    e = parse_expression("  kSum( kSEISO ,kProd(kConst, kMaternISO3) ) ")
    assert e.name == "kSum"
    assert e.args[0] == Expression("kSEISO")
    assert e.args[1].name == "kProd"
    assert [a.name for a in e.args[1].args] == ["kConst", "kMaternISO3"]
    assert str(e) == "kSum(kSEISO, kProd(kConst, kMaternISO3))"


def test_str_round_trip():
    text = "mSum(mConst, mLinear)"
    assert str(parse_expression(text)) == text


@pytest.mark.parametrize(
    "text",
    ["", "   ", "kSum(", "kSum(kSEISO,)", "kSum kSEISO", "kSum(kSEISO))", "(kSEISO)", "kSE-ISO"],
)
def test_malformed(text):
    with pytest.raises(StructureError):
        parse_expression(text)


def test_structure_error_is_parse_error():
    with pytest.raises(ParseError):
        parse_expression("kSum(,)")
