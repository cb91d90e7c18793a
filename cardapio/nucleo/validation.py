# --- Arquivo: cardapio/nucleo/validation.py ---

"""
Validação dos campos digitados nos formulários antes de qualquer acesso
ao banco de dados.

Cada verificação recebe o texto bruto e a mensagem de erro, remove espaços
nas pontas e levanta `ValidationError` com aquela mensagem quando a regra
não é satisfeita. As funções não têm efeitos colaterais.
"""

import re
from typing import Callable

from cardapio.nucleo.constants import MAX_INTEGER, MEAL_NAME_MAX_LENGTH
from cardapio.nucleo.exceptions import ValidationError
from cardapio.nucleo.utils import (
    CATEGORY_FORM,
    MEAL_FORM,
    CategoryPayload,
    MealPayload,
)

# Apenas dígitos ASCII: sem sinal e sem ponto decimal.
REGEX_INTEIRO: re.Pattern[str] = re.compile(r"[0-9]+")
REGEX_PRECO: re.Pattern[str] = re.compile(r"[0-9]+(\.[0-9]+)?")


def check(value: str, predicate: Callable[[str], bool], message: str) -> str:
    """Aplica `predicate` ao valor sem espaços; rejeita com `message` se falso."""
    stripped = (value or "").strip()
    if not predicate(stripped):
        raise ValidationError(message)
    return stripped


def require_not_empty(value: str, message: str) -> str:
    return check(value, bool, message)


def require_digits(value: str, message: str, limit: int = MAX_INTEGER) -> str:
    """Apenas dígitos e, convertido, no máximo `limit`."""
    return check(
        value,
        lambda v: REGEX_INTEIRO.fullmatch(v) is not None and int(v) <= limit,
        message,
    )


def require_price(value: str, message: str) -> str:
    return check(value, lambda v: REGEX_PRECO.fullmatch(v) is not None, message)


def require_max_length(value: str, limit: int, message: str) -> str:
    return check(value, lambda v: len(v) <= limit, message)


def validate_meal_name(name: str) -> str:
    """Valida o nome da refeição: obrigatório e com no máximo 50 caracteres."""
    name = require_not_empty(name, "Meal name cannot be empty")
    return require_max_length(
        name,
        MEAL_NAME_MAX_LENGTH,
        f"Meal name cannot exceed {MEAL_NAME_MAX_LENGTH} characters",
    )


def parse_meal_form(form: MEAL_FORM) -> MealPayload:
    """
    Valida o formulário de refeição e converte os campos.

    A ordem das verificações é fixa e a primeira falha vence: primeiro os
    campos obrigatórios, depois os formatos numéricos e por fim o tamanho
    do nome.
    """
    meal_id = require_not_empty(form.get("meal_id", ""), "Meal ID cannot be empty")
    meal_name = require_not_empty(
        form.get("meal_name", ""), "Meal name cannot be empty"
    )
    calories = require_not_empty(form.get("calories", ""), "Calories cannot be empty")
    price = require_not_empty(form.get("price", ""), "Price cannot be empty")

    require_digits(meal_id, "Meal ID must be a positive integer")
    require_digits(calories, "Calories must be a positive integer")
    require_price(price, "Price must be a positive number")
    meal_name = validate_meal_name(meal_name)

    return {
        "meal_id": int(meal_id),
        "meal_name": meal_name,
        "calories": int(calories),
        "price": float(price),
        "category_id": form.get("category_id"),
    }


def parse_category_form(form: CATEGORY_FORM) -> CategoryPayload:
    """Valida o formulário de categoria; a descrição é opcional."""
    category_id = require_not_empty(
        form.get("category_id", ""), "Category ID cannot be empty"
    )
    category_name = require_not_empty(
        form.get("category_name", ""), "Category name cannot be empty"
    )
    require_digits(category_id, "Category ID must be a positive integer")

    description = (form.get("description") or "").strip()
    return {
        "category_id": int(category_id),
        "category_name": category_name,
        "description": description or None,
    }
