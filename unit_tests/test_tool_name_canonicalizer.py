import pytest
from meal_tools.name_canonicalizer import (
    canonicalize_name,
    extract_modifiers,
    strip_quantity_tokens
)


def test_basil_dish_variants():
    assert canonicalize_name("กะเพราไก่") == "ข้าวกะเพราไก่"
    assert canonicalize_name("ข้าวผัดกะเพราหมู") == "ข้าวกะเพราหมู"
    assert canonicalize_name("ข้าวกระเพราไก่ 1 จาน") == "ข้าวกะเพราไก่"


def test_whey_alias():
    assert canonicalize_name("เวย์ 1 สกู๊ป") == "เวย์โปรตีน"
    assert canonicalize_name("เวย์โปรตีน 1 scoop") == "เวย์โปรตีน"
    assert canonicalize_name("whey protein 2 scoops") == "เวย์โปรตีน"


def test_egg_preparations_stay_distinct():
    assert canonicalize_name("ไข่ดาว 2 ฟอง") == "ไข่ดาว"
    assert canonicalize_name("ไข่ต้ม 2 ฟอง") == "ไข่ต้ม"
    assert canonicalize_name("ไข่เจียว") == "ไข่เจียว"
    assert canonicalize_name("ไข่ 2 ฟอง") == "ไข่"
    assert canonicalize_name("fried egg x2") == "ไข่ดาว"
    assert canonicalize_name("boiled eggs") == "ไข่ต้ม"
    assert canonicalize_name("2 eggs") == "ไข่"


def test_plain_rice():
    assert canonicalize_name("ข้าว 1 จาน") == "ข้าวสวย"
    assert canonicalize_name("white rice") == "ข้าวสวย"
    # Compound rice dishes are not plain rice
    assert canonicalize_name("ข้าวมันไก่") == "ข้าวมันไก่"


def test_fillers_removed():
    assert canonicalize_name("ประมาณ 2 จาน ข้าวมันไก่") == "ข้าวมันไก่"
    assert canonicalize_name("about 2 cups milk") == "milk"


def test_never_empty():
    assert canonicalize_name("2 ฟอง") == "2 ฟอง"
    assert canonicalize_name("x2") == "x2"
    assert canonicalize_name("") == ""


def test_number_bound_unit_kept_inside_words():
    assert strip_quantity_tokens("ผักกาดดอง 1 กก") == "ผักกาดดอง"


def test_extract_modifiers():
    assert extract_modifiers("กะเพราหมูสับ เพิ่มไข่ดาว") == ["เพิ่มไข่ดาว"]
    assert extract_modifiers("burger extra cheese") == ["extra cheese"]
    assert extract_modifiers("ข้าวมันไก่") == []


def test_unit_words_inside_food_names_kept():
    assert canonicalize_name("ลูกชิ้นปิ้ง 5 ไม้") == "ลูกชิ้นปิ้ง"
    assert canonicalize_name("แก้วมังกร 1 ลูก") == "แก้วมังกร"


def test_whey_alias_with_space():
    assert canonicalize_name("เวย์ โปรตีน 1 สกู๊ป") == "เวย์โปรตีน"
    assert canonicalize_name("เวย์ ช็อกโกแลต 1 สกู๊ป") == "เวย์โปรตีน ช็อกโกแลต"
