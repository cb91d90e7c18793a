# ----------------------------------------------------------------------------
# File: cardapio/view/constants.py (Constantes da Interface)
# ----------------------------------------------------------------------------
# SPDX-License-Identifier: MIT
# Copyright (c) 2024-2025 Mateus G Pereira <mateus.pereira@ifsp.edu.br>
"""
Define os textos da UI e a configuração das colunas da tabela de refeições.
"""
from typing import Any, Dict, List

THEME_NAME: str = "sandstone"

# --- Textos da Interface do Usuário (Centralizados) ---
UI_TEXTS: Dict[str, str] = {
    # Títulos de Janelas e Diálogos
    "app_title": "Meal Planning System",
    "category_dialog_title": "Add Category",
    "confirm_deletion_title": "Confirm Deletion",
    "initialization_error_title": "Startup Error",
    "form_group_label": "Enter Meal Details",
    "table_group_label": "Meals",

    # Labels
    "meal_id_label": "Meal ID:",
    "meal_name_label": "Meal Name:",
    "calories_label": "Calories:",
    "price_label": "Price:",
    "category_label": "Category:",
    "category_id_label": "Category ID:",
    "category_name_label": "Category Name:",
    "description_label": "Description:",
    "search_label": "Search:",
    "status_ready": "Ready",

    # Botões
    "submit_button": "Submit",
    "delete_button": "Delete",
    "refresh_button": "Refresh",
    "add_category_button": "Add Category",
    "export_button": "Export",
    "save_button": "Save",
    "cancel_button": "Cancel",

    # Mensagens
    "confirm_deletion_message": "Are you sure you want to delete the meal: {name}?",
    "initialization_error_message": "Error starting application: {error}",
}

# --- Colunas da Tabela de Refeições ---
MEAL_COLDATA: List[Dict[str, Any]] = [
    {"text": "Meal ID", "stretch": False, "width": 80},
    {"text": "Meal Name", "stretch": True},
    {"text": "Category", "stretch": True},
    {"text": "Calories", "stretch": False, "width": 90},
    {"text": "Price", "stretch": False, "width": 90},
]
