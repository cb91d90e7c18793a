# --- Arquivo: cardapio/nucleo/crud.py ---

"""
Fornece uma classe CRUD genérica (sem atualização) para interações com o
banco de dados via SQLAlchemy.
"""

from typing import Any, Dict, Generic, Self, Sequence, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.orm import Session as DBSession

from cardapio.nucleo.models import Base

MODEL = TypeVar("MODEL", bound=Base)


class CRUD(Generic[MODEL]):
    """
    Classe base para operações de criação, leitura e exclusão usando SQLAlchemy.
    Nenhum método confirma a transação; isso cabe à camada de serviço.
    """

    def __init__(self: Self, session: DBSession, model: Type[MODEL]):
        """Inicializa o CRUD com a sessão de DB e o modelo."""
        self._db_session = session
        self._model = model
        pk_name = model.__mapper__.primary_key[0].name
        self._pk_column = getattr(self._model, pk_name)

    def get_session(self) -> DBSession:
        """Retorna a sessão do banco de dados associada."""
        return self._db_session

    def create(self: Self, data: Dict[str, Any]) -> MODEL:
        """
        Cria um novo registro e o envia ao banco (flush), para que violações
        de chave primária apareçam imediatamente.
        """
        db_item = self._model(**data)
        self._db_session.add(db_item)
        self._db_session.flush()
        return db_item

    def read_all(self: Self) -> Sequence[MODEL]:
        """Lê todos os registros de uma tabela, na ordem padrão do banco."""
        return self._db_session.scalars(select(self._model)).all()

    def delete(self: Self, item_id: int) -> int:
        """
        Deleta um registro pela chave primária e retorna o número de linhas
        afetadas. A transação não é confirmada aqui.
        """
        result = self._db_session.execute(
            delete(self._model).where(self._pk_column == item_id)
        )
        return result.rowcount
