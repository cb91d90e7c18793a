# --- Arquivo: cardapio/nucleo/__init__.py ---

"""
Pacote principal da lógica de negócio do cardápio.

Este pacote expõe a classe `MealFacade` (acesso ao banco de dados) e o
`MealWorkflow` (orquestração das ações da interface), além dos tipos de
dados e exceções necessários.
"""

from cardapio.nucleo.exceptions import (
    CoreError,
    ExportError,
    PersistenceError,
    ValidationError,
)
from cardapio.nucleo.facade import MealFacade
from cardapio.nucleo.utils import CATEGORY_FORM, MEAL_FORM, CategoryRow, MealRow
from cardapio.nucleo.workflow import AppState, MealWorkflow, Outcome, OutcomeStatus

__all__ = [
    "MealFacade",
    "MealWorkflow",
    "AppState",
    "Outcome",
    "OutcomeStatus",
    "MEAL_FORM",
    "CATEGORY_FORM",
    "MealRow",
    "CategoryRow",
    "CoreError",
    "ValidationError",
    "PersistenceError",
    "ExportError",
]
