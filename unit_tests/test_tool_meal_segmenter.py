import pytest
from meal_tools.meal_segmenter import (
    split_meal_text,
    split_implicit_combo,
    segment_meal_text
)


def test_split_on_explicit_separators():
    assert split_meal_text("ข้าวมันไก่ + น้ำอัดลม 1 กระป๋อง") == ["ข้าวมันไก่", "น้ำอัดลม 1 กระป๋อง"]
    assert split_meal_text("ข้าว, ไข่ / นม | กล้วย") == ["ข้าว", "ไข่", "นม", "กล้วย"]
    assert split_meal_text("ข้าวสวยกับไข่เจียว") == ["ข้าวสวย", "ไข่เจียว"]
    assert split_meal_text("rice and chicken with salad") == ["rice", "chicken", "salad"]


def test_and_inside_word_is_not_a_separator():
    assert split_meal_text("sandwich") == ["sandwich"]


def test_split_on_wide_gap():
    assert split_meal_text("ข้าวผัด  ต้มยำ") == ["ข้าวผัด", "ต้มยำ"]


def test_split_empty():
    assert split_meal_text("") == []
    assert split_meal_text(" + , ") == []


def test_implicit_combo_split():
    assert split_implicit_combo("กะเพราไก่ ไข่ 2 ฟอง") == ["กะเพราไก่", "ไข่ 2 ฟอง"]
    assert split_implicit_combo("ข้าวผัด ไข่ดาว") == ["ข้าวผัด", "ไข่ดาว"]


def test_implicit_combo_keeps_leading_egg():
    assert split_implicit_combo("ไข่ดาว 2 ฟอง") == ["ไข่ดาว 2 ฟอง"]
    assert split_implicit_combo("ข้าวไข่เจียว") == ["ข้าวไข่เจียว"]


def test_segment_meal_text_combines_both_passes():
    segments = segment_meal_text("กะเพราไก่ ไข่ดาว + น้ำเปล่า")
    assert segments == ["กะเพราไก่", "ไข่ดาว", "น้ำเปล่า"]


def test_implicit_combo_english_egg():
    assert split_implicit_combo("pad kra pao chicken egg 2") == ["pad kra pao chicken", "egg 2"]
    assert split_implicit_combo("toast 2 eggs") == ["toast", "2 eggs"]
    assert split_implicit_combo("rice fried egg") == ["rice", "fried egg"]
    assert split_implicit_combo("noodles omelette") == ["noodles", "omelette"]


@pytest.mark.parametrize("segment", [
    "fried egg x2", "2 boiled eggs", "hard boiled egg", "egg fried rice", "eggplant curry",
])
def test_english_egg_phrase_kept_whole(segment):
    assert split_implicit_combo(segment) == [segment]
