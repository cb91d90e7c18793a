# --- Arquivo: cardapio/nucleo/utils.py ---

"""
Funções utilitárias para a aplicação, incluindo manipulação de caminhos,
busca aproximada e tipos de dados customizados.
"""
import ctypes
import os
import platform
from pathlib import Path
from typing import List, Optional, TypedDict

from fuzzywuzzy import fuzz

from cardapio.nucleo.constants import (
    CSIDL_PERSONAL,
    FUZZY_SEARCH_THRESHOLD,
    SHGFP_TYPE_CURRENT,
    UNCATEGORIZED_LABEL,
)

# --- Tipos de Dados ---

# Campos brutos do formulário, exatamente como digitados.
MEAL_FORM = TypedDict(
    "MEAL_FORM",
    {
        "meal_id": str,
        "meal_name": str,
        "calories": str,
        "price": str,
        "category_id": Optional[int],
    },
)

CATEGORY_FORM = TypedDict(
    "CATEGORY_FORM",
    {
        "category_id": str,
        "category_name": str,
        "description": str,
    },
)


class MealPayload(TypedDict):
    """Refeição validada, pronta para ser gravada."""

    meal_id: int
    meal_name: str
    calories: int
    price: float
    category_id: Optional[int]


class CategoryPayload(TypedDict):
    """Categoria validada, pronta para ser gravada."""

    category_id: int
    category_name: str
    description: Optional[str]


class MealRow(TypedDict):
    """Linha da listagem de refeições com o nome da categoria (LEFT JOIN)."""

    meal_id: int
    meal_name: str
    calories: int
    price: float
    category_id: Optional[int]
    category_name: Optional[str]


class CategoryRow(TypedDict):
    category_id: int
    category_name: str
    description: Optional[str]


def display_category(row: MealRow) -> str:
    """Nome da categoria para exibição; linhas sem categoria viram 'Uncategorized'."""
    return row["category_name"] if row["category_name"] is not None else UNCATEGORIZED_LABEL


def get_documents_path() -> Path:
    """Retorna o caminho para a pasta 'Documentos' do usuário de forma segura."""
    if platform.system() == "Windows":
        try:
            buf = ctypes.create_unicode_buffer(260)
            ctypes.windll.shell32.SHGetFolderPathW(  # type: ignore[attr-defined]
                None, CSIDL_PERSONAL, None, SHGFP_TYPE_CURRENT, buf
            )
            return Path(buf.value)
        except (AttributeError, OSError):
            return Path.home() / "Documents"

    # Para Linux, macOS e outros Unix-like
    if xdg_documents := os.environ.get("XDG_DOCUMENTS_DIR"):
        return Path(xdg_documents.strip('"'))

    return Path.home() / "Documents"


def filter_meals(
    meals: List[MealRow], term: Optional[str], threshold: int = FUZZY_SEARCH_THRESHOLD
) -> List[MealRow]:
    """
    Filtra as refeições por busca aproximada (fuzzywuzzy) no nome da refeição
    e da categoria, ordenando por relevância. Sem termo, retorna a lista como está.
    """
    if not term or not term.strip():
        return list(meals)

    term_lower = term.lower().strip()
    scored = []
    for row in meals:
        score_name = fuzz.partial_ratio(term_lower, row["meal_name"].lower())
        score_category = fuzz.partial_ratio(term_lower, display_category(row).lower())
        final_score = max(score_name, score_category)
        if final_score >= threshold:
            scored.append((final_score, row))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [row for _, row in scored]
