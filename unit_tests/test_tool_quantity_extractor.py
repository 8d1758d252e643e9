import pytest
from meal_tools.quantity_extractor import extract_quantity, detect_unit
from meal_tools.schemas import MealUnit


def test_number_with_unit():
    q = extract_quantity("ไข่ 2 ฟอง")
    assert q.quantity == 2
    assert q.unit == MealUnit.EGG
    assert q.explicit


def test_unit_aliases_map_to_canonical():
    assert extract_quantity("นม 1 แก้ว").unit == MealUnit.CUP
    assert extract_quantity("เวย์ 1 scoop").unit == MealUnit.SCOOP
    assert extract_quantity("ข้าว 1.5 กิโลกรัม").unit == MealUnit.KILOGRAM
    assert extract_quantity("ไก่ 200 g").unit == MealUnit.GRAM


def test_decimal_quantity():
    q = extract_quantity("ข้าว 1.5 จาน")
    assert q.quantity == 1.5
    assert q.unit == MealUnit.PLATE


def test_multiplier():
    q = extract_quantity("fried egg x2")
    assert q.quantity == 2
    assert q.unit is None
    assert extract_quantity("ไข่ดาว × 3").quantity == 3


def test_leading_number():
    assert extract_quantity("2 ข้าวมันไก่").quantity == 2


def test_any_number():
    q = extract_quantity("ไข่ต้ม 2")
    assert q.quantity == 2
    assert q.explicit


def test_number_word_with_unit_unnormalized():
    q = extract_quantity("ไข่สองฟอง")
    assert q.quantity == 2
    assert q.unit == MealUnit.EGG


def test_default_is_one():
    q = extract_quantity("ข้าวมันไก่")
    assert q.quantity == 1
    assert q.unit is None
    assert not q.explicit


def test_unit_without_number():
    q = extract_quantity("ข้าวสวย จาน")
    assert q.quantity == 1
    assert q.unit == MealUnit.PLATE
    assert not q.explicit


def test_zero_becomes_one():
    q = extract_quantity("ไข่ 0 ฟอง")
    assert q.quantity == 1
    assert not q.explicit


def test_number_bound_alias_needs_digit():
    # "กก" inside ผักกาด is not a kilogram
    assert detect_unit("ผักกาดดอง") is None
    assert detect_unit("เนื้อ 1 กก") == MealUnit.KILOGRAM
    assert detect_unit("can of soda") is None


@pytest.mark.parametrize("segment", [
    "", "ไข่ 0 ฟอง", "x0", "0", "ข้าว", "น้ำ 500 ml", "สิบ ฟอง",
])
def test_quantity_always_positive(segment):
    assert extract_quantity(segment).quantity > 0


def test_thai_unit_inside_word_is_not_a_unit():
    # แก้ว in แก้วมังกร, ลูก and ชิ้น in ลูกชิ้น
    assert detect_unit("แก้วมังกร") is None
    assert detect_unit("ลูกชิ้นปิ้ง") is None
    assert detect_unit("แก้วมังกร 1 ลูก") == MealUnit.PIECE


def test_skewer_unit():
    q = extract_quantity("ลูกชิ้นปิ้ง 5 ไม้")
    assert q.quantity == 5
    assert q.unit == MealUnit.PIECE


def test_overflowing_number_becomes_one():
    q = extract_quantity("9" * 400)
    assert q.quantity == 1
    assert not q.explicit
