import pytest
import sys
import json
from pathlib import Path

# Add root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def _nutrition_reply(calories, protein, carbs, fat, item_name="ข้าวกะเพราไก่"):
    return json.dumps({
        "results": [{
            "itemName": item_name,
            "assumedServing": "1 จาน",
            "caloriesKcal": calories,
            "proteinG": protein,
            "carbsG": carbs,
            "fatG": fat,
            "confidence": "medium",
            "notes": [],
        }],
        "followUpQuestions": [],
        "reasoningSummary": "standard plate",
    }, ensure_ascii=False)


@pytest.fixture
def zero_nutrition_reply():
    """Well-formed nutrition answer whose numbers are all zero."""
    return _nutrition_reply(0, 0, 0, 0)


@pytest.fixture
def real_nutrition_reply():
    return _nutrition_reply(580, 25, 70, 21)


@pytest.fixture
def coach_reply():
    return json.dumps({
        "adviceMarkdown": "**Keep going**",
        "followUpQuestions": ["How did you sleep?"],
        "notes": [],
    })
