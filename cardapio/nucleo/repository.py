# --- Arquivo: cardapio/nucleo/repository.py ---

"""
Fornece implementações concretas do Padrão de Repositório, especializando
a classe CRUD genérica para cada modelo de dados da aplicação.
"""
from typing import Any, List, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from cardapio.nucleo.crud import CRUD
from cardapio.nucleo.models import Category, Meal


class MealRepository(CRUD[Meal]):
    """Repositório para operações com o modelo Meal."""

    def __init__(self, session: Session):
        super().__init__(session, Meal)

    def list_with_category_name(self) -> List[Tuple[Meal, Any]]:
        """
        Retorna pares (refeição, nome da categoria) via LEFT JOIN.
        O nome é None quando a categoria referenciada não existe.
        Sem ORDER BY: a ordem é a padrão do banco.
        """
        query = select(Meal, Category.category_name).outerjoin(
            Category, Meal.category_id == Category.category_id
        )
        return [(row[0], row[1]) for row in self._db_session.execute(query).all()]


class CategoryRepository(CRUD[Category]):
    """Repositório para operações com o modelo Category."""

    def __init__(self, session: Session):
        super().__init__(session, Category)
