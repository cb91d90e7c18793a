# --- Arquivo: cardapio/nucleo/service_logic.py ---

"""
Módulo de serviço funcional que encapsula a lógica de persistência do
cardápio. Cada função recebe os repositórios, confirma ou desfaz a
transação e traduz erros do SQLAlchemy em `PersistenceError`, preservando
o erro original como causa.
"""

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

import xlsxwriter
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from xlsxwriter.exceptions import XlsxWriterException

from cardapio.nucleo.constants import EXPORT_HEADER, EXPORT_SHEET_NAME
from cardapio.nucleo.exceptions import ExportError, PersistenceError
from cardapio.nucleo.repository import CategoryRepository, MealRepository
from cardapio.nucleo.utils import (
    CategoryPayload,
    CategoryRow,
    MealPayload,
    MealRow,
    display_category,
    get_documents_path,
)

logger = logging.getLogger(__name__)


def _rollback_quietly(session: Session):
    """Desfaz a transação; falhas aqui são apenas registradas no log."""
    try:
        session.rollback()
    except SQLAlchemyError as e:
        logger.warning("Falha ao desfazer transação: %s", e)


def insert_meal(repo_meal: MealRepository, payload: MealPayload):
    """Grava uma nova refeição com os cinco campos."""
    session = repo_meal.get_session()
    try:
        repo_meal.create(dict(payload))
        session.commit()
    except SQLAlchemyError as e:
        _rollback_quietly(session)
        raise PersistenceError(f"Failed to insert meal: {e}") from e
    except Exception:
        _rollback_quietly(session)
        raise
    logger.debug("Refeição %s gravada.", payload["meal_id"])


def delete_meal(repo_meal: MealRepository, meal_id: int):
    """Deleta uma refeição; falha se nenhuma linha for afetada."""
    session = repo_meal.get_session()
    try:
        affected = repo_meal.delete(meal_id)
        if affected == 0:
            raise PersistenceError(f"No meal found with ID: {meal_id}")
        session.commit()
    except SQLAlchemyError as e:
        _rollback_quietly(session)
        raise PersistenceError(f"Failed to delete meal: {e}") from e
    except Exception:
        _rollback_quietly(session)
        raise
    logger.debug("Refeição %s removida.", meal_id)


def list_meals(repo_meal: MealRepository) -> List[MealRow]:
    """Lista as refeições com o nome da categoria (LEFT JOIN)."""
    session = repo_meal.get_session()
    try:
        meals: List[MealRow] = [
            {
                "meal_id": meal.meal_id,
                "meal_name": meal.meal_name,
                "calories": meal.calories,
                "price": meal.price,
                "category_id": meal.category_id,
                "category_name": category_name,
            }
            for meal, category_name in repo_meal.list_with_category_name()
        ]
        # Encerra a transação de leitura para enxergar gravações futuras.
        session.commit()
    except SQLAlchemyError as e:
        _rollback_quietly(session)
        raise PersistenceError(f"Failed to retrieve meals: {e}") from e
    except Exception:
        _rollback_quietly(session)
        raise
    return meals


def insert_category(repo_category: CategoryRepository, payload: CategoryPayload):
    """Grava uma nova categoria."""
    session = repo_category.get_session()
    try:
        repo_category.create(dict(payload))
        session.commit()
    except SQLAlchemyError as e:
        _rollback_quietly(session)
        raise PersistenceError(f"Failed to insert category: {e}") from e
    except Exception:
        _rollback_quietly(session)
        raise
    logger.debug("Categoria %s gravada.", payload["category_id"])


def list_categories(repo_category: CategoryRepository) -> List[CategoryRow]:
    """Lista todas as categorias."""
    session = repo_category.get_session()
    try:
        categories: List[CategoryRow] = [
            {
                "category_id": c.category_id,
                "category_name": c.category_name,
                "description": c.description,
            }
            for c in repo_category.read_all()
        ]
        session.commit()
    except SQLAlchemyError as e:
        _rollback_quietly(session)
        raise PersistenceError(f"Failed to retrieve categories: {e}") from e
    except Exception:
        _rollback_quietly(session)
        raise
    return categories


def export_meals_to_xlsx(
    repo_meal: MealRepository, file_path: Optional[Path] = None
) -> str:
    """Exporta a listagem de refeições para um arquivo XLSX."""
    meals = list_meals(repo_meal)
    if file_path is None:
        file_path = get_documents_path() / f"meals-{date.today().isoformat()}.xlsx"

    try:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        with xlsxwriter.Workbook(str(file_path)) as workbook:
            worksheet = workbook.add_worksheet(EXPORT_SHEET_NAME)
            worksheet.write_row(0, 0, EXPORT_HEADER)
            for i, row in enumerate(meals):
                worksheet.write_row(
                    i + 1,
                    0,
                    [
                        row["meal_id"],
                        row["meal_name"],
                        display_category(row),
                        row["calories"],
                        row["price"],
                    ],
                )
    except (OSError, XlsxWriterException) as e:
        raise ExportError(f"Failed to export meals: {e}") from e
    return str(file_path)
