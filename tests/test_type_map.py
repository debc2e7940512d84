import pytest

from foxpro_export.errors import UnsupportedTypeError
from foxpro_export.type_map import RAW_TYPE_CODES, TypeTag, map_type_code


def test_every_known_code_maps_to_one_tag():
    for code, tag in RAW_TYPE_CODES.items():
        assert map_type_code(code) is tag
        # same input, same answer
        assert map_type_code(code) is map_type_code(code)

def test_every_tag_is_reachable():
    assert set(RAW_TYPE_CODES.values()) == set(TypeTag)

@pytest.mark.parametrize("code,tag", [
    (3, TypeTag.INTEGER),
    (5, TypeTag.DOUBLE),
    (6, TypeTag.CURRENCY),
    (11, TypeTag.LOGICAL),
    (128, TypeTag.GENERAL),
    (129, TypeTag.CHARACTER),
    (131, TypeTag.NUMERIC),
    (133, TypeTag.DATE),
    (135, TypeTag.DATETIME),
])
def test_provider_codes(code, tag):
    assert map_type_code(code) is tag

def test_numeric_string_codes_are_accepted():
    assert map_type_code("129") is TypeTag.CHARACTER
    assert map_type_code(" 131 ") is TypeTag.NUMERIC

@pytest.mark.parametrize("raw", [0, 1, 2, 7, 130, 200, -3, "abc", "", None, 3.0, True, False, "²", "--3", "1_29"])
def test_unknown_codes_fail(raw):
    with pytest.raises(UnsupportedTypeError):
        map_type_code(raw)

def test_tags_print_canonical_names():
    assert str(TypeTag.CHARACTER) == "Character"
    assert str(TypeTag.DATETIME) == "DateTime"
    assert [str(t) for t in TypeTag] == [
        "Integer", "Double", "Currency", "Logical", "General",
        "Character", "Numeric", "Date", "DateTime",
    ]
