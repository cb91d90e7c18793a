# --- Arquivo: cardapio/nucleo/models.py ---

# ----------------------------------------------------------------------------
# SPDX-License-Identifier: MIT
# Copyright (c) 2024-2025 Mateus G Pereira <mateus.pereira@ifsp.edu.br>
"""
Define os modelos de dados SQLAlchemy que representam as tabelas do banco de
dados do cardápio: Refeições (`meals`) e Categorias (`meal_categories`).
"""
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import Engine, Integer, Numeric, String, create_engine, make_url
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from cardapio.nucleo.constants import DATABASE_URL


class Base(DeclarativeBase):
    """Base declarativa para os modelos do SQLAlchemy."""


class Category(Base):
    """Representa uma categoria de refeições (ex: Café da manhã)."""

    __tablename__ = "meal_categories"

    category_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False
    )
    category_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Category(category_id={self.category_id}, "
            f"category_name='{self.category_name}')>"
        )


class Meal(Base):
    """
    Representa uma refeição do cardápio.

    `category_id` não possui chave estrangeira: pode apontar para uma
    categoria inexistente, e a listagem usa LEFT JOIN para tolerar isso.
    """

    __tablename__ = "meals"

    meal_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    meal_name: Mapped[str] = mapped_column(String(50), nullable=False)
    calories: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True, index=True
    )

    def __repr__(self) -> str:
        return (
            f"<Meal(meal_id={self.meal_id}, meal_name='{self.meal_name}', "
            f"calories={self.calories}, price={self.price}, "
            f"category_id={self.category_id})>"
        )


SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def build_engine(database_url: Optional[str] = None) -> Engine:
    """
    Cria o motor do banco de dados.

    Para SQLite a conexão é liberada para uso pelas threads do pool de
    trabalho; bancos em memória compartilham uma única conexão (StaticPool).
    """
    url = database_url or DATABASE_URL
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    opcoes: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    banco = make_url(url).database
    if not banco or banco == ":memory:":
        opcoes["poolclass"] = StaticPool
    else:
        Path(banco).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, **opcoes)


def create_database_and_tables(engine: Engine):
    """Cria as tabelas, se não existirem. Tabelas existentes não são alteradas."""
    Base.metadata.create_all(bind=engine)
