# ----------------------------------------------------------------------------
# File: cardapio/nucleo/constants.py (Constantes do Núcleo)
# ----------------------------------------------------------------------------
# SPDX-License-Identifier: MIT
# Copyright (c) 2024-2025 Mateus G Pereira <mateus.pereira@ifsp.edu.br>
"""
Define constantes globais, caminhos de arquivo e configurações do núcleo
da aplicação de cardápio. Os valores padrão podem ser sobrescritos por
variáveis de ambiente com o prefixo `CARDAPIO_`.
"""
import os
from pathlib import Path
from typing import List

# --- Caminhos de Diretório e Arquivo ---
APP_DIR: Path = Path(".")
CONFIG_DIR: Path = Path(os.environ.get("CARDAPIO_CONFIG_DIR", APP_DIR / "config"))
LOG_DIR: Path = Path(os.environ.get("CARDAPIO_LOG_DIR", APP_DIR / "logs"))
LOG_FILE_NAME: str = "cardapio.log"

# --- Banco de Dados ---
DATABASE_URL: str = os.environ.get(
    "CARDAPIO_DATABASE_URL", f"sqlite:///{CONFIG_DIR.resolve()}/cardapio.db"
)

# --- Concorrência ---
WORKER_POOL_SIZE: int = int(os.environ.get("CARDAPIO_WORKERS", "3"))
WORKER_THREAD_PREFIX: str = "cardapio-db"
QUEUE_POLL_INTERVAL_MS: int = 100

# --- Logging ---
LOG_LEVEL: str = os.environ.get("CARDAPIO_LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s"

# --- Regras de Negócio ---
MEAL_NAME_MAX_LENGTH: int = 50
# Maior valor aceito para IDs e calorias (inteiro de 32 bits com sinal).
MAX_INTEGER: int = 2**31 - 1
UNCATEGORIZED_LABEL: str = "Uncategorized"
FUZZY_SEARCH_THRESHOLD: int = 60

# --- Constantes para API Windows (utils.get_documents_path) ---
CSIDL_PERSONAL: int = 5
SHGFP_TYPE_CURRENT: int = 0

# --- Cabeçalho para Exportação Excel ---
EXPORT_HEADER: List[str] = ["Meal ID", "Meal Name", "Category", "Calories", "Price"]
EXPORT_SHEET_NAME: str = "Meals"
