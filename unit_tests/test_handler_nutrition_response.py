import json

import pytest
from handlers.nutrition_response import (
    resolve_nutrition_reply,
    resolve_coach_reply,
    is_degenerate_nutrition
)
from handlers.response_shapes import NutritionItem, NutritionReply


def test_real_reply_passes_through(real_nutrition_reply):
    result = resolve_nutrition_reply(real_nutrition_reply, "กะเพราไก่")

    assert result["status"] == "success"
    assert result["parsing_method"] == "ai"
    assert result["results"][0]["itemName"] == "ข้าวกะเพราไก่"
    assert result["results"][0]["caloriesKcal"] == 580
    assert result["diagnostics"] == {"used_repair": False, "used_extraction": False}


def test_fenced_reply_with_trailing_comma():
    raw = '```json\n{"results": [{"itemName": "ข้าวสวย", "caloriesKcal": 210,}],}\n```'
    result = resolve_nutrition_reply(raw, "ข้าว 1 จาน")

    assert result["status"] == "success"
    assert result["parsing_method"] == "ai_repaired"
    assert result["diagnostics"]["used_extraction"]


def test_zero_reply_uses_fallback(zero_nutrition_reply):
    result = resolve_nutrition_reply(zero_nutrition_reply, "ไข่ต้ม 2 ฟอง")

    assert result["status"] == "partial"
    assert result["parsing_method"] == "fallback_estimate"
    assert len(result["results"]) == 1
    egg = result["results"][0]
    assert egg["itemName"] == "ไข่ต้ม"
    assert egg["caloriesKcal"] == 144.0
    assert egg["confidence"] == "high"
    assert result["unestimated_items"] == []
    assert result["meal_hint"]["items"][0]["unit"] == "ฟอง"


def test_zero_reply_reports_unestimated(zero_nutrition_reply):
    result = resolve_nutrition_reply(zero_nutrition_reply, "ข้าวมันไก่ + ไข่ดาว 1 ฟอง")

    assert result["parsing_method"] == "fallback_estimate"
    assert [r["itemName"] for r in result["results"]] == ["ไข่ดาว"]
    assert result["unestimated_items"] == ["ข้าวมันไก่"]


def test_zero_reply_without_baseline(zero_nutrition_reply):
    result = resolve_nutrition_reply(zero_nutrition_reply, "ข้าวมันไก่")

    assert result["status"] == "partial"
    assert result["parsing_method"] == "ai"
    assert result["notes"]
    assert result["results"][0]["caloriesKcal"] == 0


def test_non_json_reply_is_error():
    result = resolve_nutrition_reply("Sorry, I cannot help with {that", "ข้าว")

    assert result["status"] == "error"
    assert "suggestion" in result
    assert result["diagnostics"]["last_candidate"]


def test_degenerate_detection():
    assert is_degenerate_nutrition(NutritionReply())
    assert is_degenerate_nutrition(NutritionReply.model_validate(
        {"results": [{"itemName": "x", "caloriesKcal": None, "proteinG": "abc"}]}
    ))
    assert not is_degenerate_nutrition(NutritionReply.model_validate(
        {"results": [{"itemName": "x", "fatG": 3}]}
    ))


def test_loose_model_output_is_coerced():
    item = NutritionItem.model_validate(json.loads(
        '{"itemName": null, "caloriesKcal": NaN, "proteinG": true, "confidence": "very high", "notes": "n/a"}'
    ))
    assert item.item_name == "Meal"
    assert item.calories_kcal is None
    assert item.protein_g is None
    assert item.confidence == "medium"
    assert item.notes == []

    reply = NutritionReply.model_validate({"results": "oops", "reasoningSummary": 5})
    assert reply.results == []
    assert reply.reasoning_summary is None


def test_coach_reply(coach_reply):
    result = resolve_coach_reply("Here you go:\n" + coach_reply)

    assert result["status"] == "success"
    assert result["advice_markdown"] == "**Keep going**"
    assert result["follow_up_questions"] == ["How did you sleep?"]


def test_coach_reply_missing_advice():
    result = resolve_coach_reply('{"notes": []}')
    assert result["status"] == "error"
