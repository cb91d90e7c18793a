import pytest

from cardapio.nucleo.exceptions import ValidationError
from cardapio.nucleo.validation import (
    parse_category_form,
    parse_meal_form,
    require_digits,
    require_max_length,
    require_not_empty,
    require_price,
    validate_meal_name,
)

# --- Fixtures Reutilizáveis ---


@pytest.fixture
def meal_form():
    """Formulário de refeição válido, como digitado na UI."""
    return {
        "meal_id": " 101 ",
        "meal_name": "  Oatmeal ",
        "calories": "250",
        "price": "3.50",
        "category_id": 1,
    }


@pytest.fixture
def category_form():
    return {
        "category_id": "1",
        "category_name": "Breakfast",
        "description": "Morning meals",
    }


# --- Suítes de Testes ---


class TestPrimitiveChecks:
    """Verificações individuais de formato."""

    def test_not_empty_returns_stripped_value(self):
        assert require_not_empty("  abc  ", "msg") == "abc"

    @pytest.mark.parametrize("value", ["", "   ", "\t\n", None])
    def test_not_empty_rejects_blank(self, value):
        with pytest.raises(ValidationError, match="^msg$"):
            require_not_empty(value, "msg")

    @pytest.mark.parametrize("value", ["0", "7", "101", "000123", " 42 "])
    def test_digits_accepts_unsigned_integers(self, value):
        assert require_digits(value, "bad") == value.strip()

    @pytest.mark.parametrize(
        "value", ["-1", "+1", "1.5", "12a", "a12", "1 2", "١٢", "1e3", ""]
    )
    def test_digits_rejects_non_numeric_and_signed(self, value):
        with pytest.raises(ValidationError, match="bad"):
            require_digits(value, "bad")

    def test_digits_upper_limit(self):
        assert require_digits(str(2**31 - 1), "bad") == "2147483647"
        with pytest.raises(ValidationError, match="bad"):
            require_digits(str(2**31), "bad")

    @pytest.mark.parametrize("value", ["0", "3", "3.50", "10.0", "0.99"])
    def test_price_accepts_non_negative_decimals(self, value):
        assert require_price(value, "bad price") == value

    @pytest.mark.parametrize(
        "value", ["-3.50", "3.", ".5", "1.2.3", "abc", "3,50", "3.5a", "+1"]
    )
    def test_price_rejects_malformed(self, value):
        with pytest.raises(ValidationError, match="bad price"):
            require_price(value, "bad price")

    def test_max_length_boundary(self):
        assert require_max_length("x" * 50, 50, "long") == "x" * 50
        with pytest.raises(ValidationError, match="long"):
            require_max_length("x" * 51, 50, "long")


class TestMealName:
    """Caminho dedicado de validação do nome."""

    def test_accepts_fifty_characters(self):
        assert validate_meal_name("a" * 50) == "a" * 50

    def test_rejects_fifty_one_characters(self):
        with pytest.raises(ValidationError, match="Meal name cannot exceed 50 characters"):
            validate_meal_name("a" * 51)

    def test_rejects_empty(self):
        with pytest.raises(ValidationError, match="Meal name cannot be empty"):
            validate_meal_name("   ")

    def test_length_counts_after_trim(self):
        assert validate_meal_name("  " + "a" * 50 + "  ") == "a" * 50


class TestParseMealForm:
    """Validação composta do formulário de refeição."""

    def test_valid_form_is_converted(self, meal_form):
        payload = parse_meal_form(meal_form)
        assert payload == {
            "meal_id": 101,
            "meal_name": "Oatmeal",
            "calories": 250,
            "price": 3.5,
            "category_id": 1,
        }

    def test_missing_category_stays_none(self, meal_form):
        meal_form["category_id"] = None
        assert parse_meal_form(meal_form)["category_id"] is None

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("meal_id", "", "Meal ID cannot be empty"),
            ("meal_name", " ", "Meal name cannot be empty"),
            ("calories", "", "Calories cannot be empty"),
            ("price", "", "Price cannot be empty"),
            ("meal_id", "12a", "Meal ID must be a positive integer"),
            ("meal_id", "-5", "Meal ID must be a positive integer"),
            ("calories", "2.5", "Calories must be a positive integer"),
            ("calories", "-100", "Calories must be a positive integer"),
            ("price", "-3.50", "Price must be a positive number"),
            ("price", "1.2.3", "Price must be a positive number"),
            ("meal_name", "n" * 51, "Meal name cannot exceed 50 characters"),
            ("meal_id", "9" * 25, "Meal ID must be a positive integer"),
            ("meal_id", "2147483648", "Meal ID must be a positive integer"),
            ("calories", "9" * 25, "Calories must be a positive integer"),
        ],
    )
    def test_rejection_messages(self, meal_form, field, value, message):
        meal_form[field] = value
        with pytest.raises(ValidationError) as exc_info:
            parse_meal_form(meal_form)
        assert str(exc_info.value) == message

    def test_empty_checks_run_before_format_checks(self, meal_form):
        """Um ID malformado não é reportado enquanto houver campo vazio."""
        meal_form["meal_id"] = "abc"
        meal_form["price"] = ""
        with pytest.raises(ValidationError, match="Price cannot be empty"):
            parse_meal_form(meal_form)

    def test_first_format_failure_wins(self, meal_form):
        meal_form["calories"] = "x"
        meal_form["price"] = "y"
        with pytest.raises(ValidationError, match="Calories must be a positive integer"):
            parse_meal_form(meal_form)

    def test_name_length_checked_after_numeric_formats(self, meal_form):
        meal_form["meal_name"] = "n" * 80
        meal_form["price"] = "cheap"
        with pytest.raises(ValidationError, match="Price must be a positive number"):
            parse_meal_form(meal_form)


class TestParseCategoryForm:
    """Validação do formulário de categoria."""

    def test_valid_form_is_converted(self, category_form):
        assert parse_category_form(category_form) == {
            "category_id": 1,
            "category_name": "Breakfast",
            "description": "Morning meals",
        }

    def test_blank_description_becomes_none(self, category_form):
        category_form["description"] = "   "
        assert parse_category_form(category_form)["description"] is None

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("category_id", "", "Category ID cannot be empty"),
            ("category_name", "", "Category name cannot be empty"),
            ("category_id", "x1", "Category ID must be a positive integer"),
            ("category_id", "-1", "Category ID must be a positive integer"),
            ("category_id", "9" * 25, "Category ID must be a positive integer"),
        ],
    )
    def test_rejection_messages(self, category_form, field, value, message):
        category_form[field] = value
        with pytest.raises(ValidationError) as exc_info:
            parse_category_form(category_form)
        assert str(exc_info.value) == message
