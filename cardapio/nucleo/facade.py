# --- Arquivo: cardapio/nucleo/facade.py ---

"""
Fornece uma Fachada de alto nível para o acesso ao banco de dados do
cardápio.

Qualquer cliente deve interagir exclusivamente com a classe MealFacade,
que é a única dona da sessão do banco de dados e dos repositórios. As
chamadas podem vir de várias threads do pool de trabalho; um lock interno
serializa o uso da sessão, de modo que apenas uma operação acessa o banco
por vez.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from cardapio.nucleo import service_logic
from cardapio.nucleo.exceptions import PersistenceError
from cardapio.nucleo.models import (
    SessionLocal,
    build_engine,
    create_database_and_tables,
)
from cardapio.nucleo.repository import CategoryRepository, MealRepository
from cardapio.nucleo.utils import CategoryPayload, CategoryRow, MealPayload, MealRow

logger = logging.getLogger(__name__)


class MealFacade:
    """
    Interface simplificada para a persistência de refeições e categorias.
    """

    def __init__(self, database_url: Optional[str] = None):
        """
        Inicializa a Fachada, configurando a conexão com o banco de dados
        e instanciando os repositórios.
        """
        self._engine = build_engine(database_url)
        try:
            create_database_and_tables(self._engine)
        except SQLAlchemyError as e:
            # Sem conexão na partida: as operações falharão individualmente.
            logger.error("Não foi possível preparar as tabelas: %s", e)
        self._db_session = SessionLocal(bind=self._engine)
        self._lock = threading.Lock()
        self._closed = False

        self._meal_repo = MealRepository(self._db_session)
        self._category_repo = CategoryRepository(self._db_session)
        logger.info("Fachada iniciada (%s).", self._engine.url.render_as_string())

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self):
        """Fecha a conexão com o banco de dados. Chamadas repetidas são ignoradas."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._db_session.close()
                self._engine.dispose()
            except SQLAlchemyError:
                logger.exception("Erro ao fechar a conexão com o banco de dados.")
        logger.info("Conexão com o banco de dados fechada.")

    def __enter__(self):
        """Permite o uso da Fachada como um gerenciador de contexto."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Garante que a conexão com o banco de dados seja fechada."""
        self.close()

    def _ensure_open(self):
        if self._closed:
            raise PersistenceError("Database connection is not established")

    def insert_meal(self, payload: MealPayload):
        """Grava uma nova refeição."""
        with self._lock:
            self._ensure_open()
            service_logic.insert_meal(self._meal_repo, payload)

    def delete_meal(self, meal_id: int):
        """Remove a refeição com o ID informado."""
        with self._lock:
            self._ensure_open()
            service_logic.delete_meal(self._meal_repo, meal_id)

    def list_meals(self) -> List[MealRow]:
        """Retorna todas as refeições com o nome da categoria."""
        with self._lock:
            self._ensure_open()
            return service_logic.list_meals(self._meal_repo)

    def insert_category(self, payload: CategoryPayload):
        """Grava uma nova categoria."""
        with self._lock:
            self._ensure_open()
            service_logic.insert_category(self._category_repo, payload)

    def list_categories(self) -> List[CategoryRow]:
        """Retorna todas as categorias."""
        with self._lock:
            self._ensure_open()
            return service_logic.list_categories(self._category_repo)

    def export_meals_to_xlsx(self, file_path: Optional[Path] = None) -> str:
        """Exporta as refeições para um arquivo XLSX e retorna o caminho gravado."""
        with self._lock:
            self._ensure_open()
            return service_logic.export_meals_to_xlsx(self._meal_repo, file_path)
