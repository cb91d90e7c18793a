from pathlib import Path
from unittest.mock import patch

import pytest

from cardapio.nucleo.utils import display_category, filter_meals, get_documents_path


@pytest.fixture
def meals():
    return [
        {
            "meal_id": 1,
            "meal_name": "Oatmeal",
            "calories": 250,
            "price": 3.5,
            "category_id": 1,
            "category_name": "Breakfast",
        },
        {
            "meal_id": 2,
            "meal_name": "Caesar Salad",
            "calories": 180,
            "price": 7.25,
            "category_id": 2,
            "category_name": "Lunch",
        },
        {
            "meal_id": 3,
            "meal_name": "Tomato Soup",
            "calories": 120,
            "price": 4.0,
            "category_id": None,
            "category_name": None,
        },
    ]


class TestDisplayCategory:
    def test_named_category(self, meals):
        assert display_category(meals[0]) == "Breakfast"

    def test_missing_category(self, meals):
        assert display_category(meals[2]) == "Uncategorized"


class TestFilterMeals:
    """Busca aproximada por nome da refeição ou da categoria."""

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_blank_term_returns_everything(self, meals, term):
        result = filter_meals(meals, term)
        assert result == meals
        assert result is not meals

    def test_matches_meal_name(self, meals):
        result = filter_meals(meals, "salad", threshold=80)
        assert [m["meal_id"] for m in result] == [2]

    def test_matches_category_name(self, meals):
        result = filter_meals(meals, "BREAKFAST", threshold=80)
        assert [m["meal_id"] for m in result] == [1]

    def test_matches_uncategorized_label(self, meals):
        result = filter_meals(meals, "uncategorized", threshold=90)
        assert [m["meal_id"] for m in result] == [3]

    def test_no_match(self, meals):
        assert filter_meals(meals, "zzzzqqq", threshold=80) == []


class TestDocumentsPath:
    def test_xdg_documents_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_DOCUMENTS_DIR", f'"{tmp_path}"')
        with patch("cardapio.nucleo.utils.platform.system", return_value="Linux"):
            assert get_documents_path() == tmp_path

    def test_home_fallback(self, monkeypatch):
        monkeypatch.delenv("XDG_DOCUMENTS_DIR", raising=False)
        with patch("cardapio.nucleo.utils.platform.system", return_value="Linux"):
            assert get_documents_path() == Path.home() / "Documents"
