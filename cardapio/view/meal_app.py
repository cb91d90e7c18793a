# ----------------------------------------------------------------------------
# File: cardapio/view/meal_app.py (Janela Principal da UI)
# ----------------------------------------------------------------------------
# SPDX-License-Identifier: MIT
# Copyright (c) 2024-2025 Mateus G Pereira <mateus.pereira@ifsp.edu.br>
"""
Fornece a janela principal (`MealApp`): formulário de refeição, tabela com
as refeições e barra de status. A janela implementa os callbacks do
`MealWorkflow` e drena a fila de resultados periodicamente via `after()`.
"""
import logging
import sys
import tkinter as tk
from tkinter import filedialog, messagebox
from typing import Dict, List, Optional, Tuple

import ttkbootstrap as ttk
from ttkbootstrap.constants import BOTH, EW, LEFT, NSEW, RIGHT, W, X
from ttkbootstrap.dialogs import Messagebox
from ttkbootstrap.tableview import Tableview

from cardapio.nucleo.constants import QUEUE_POLL_INTERVAL_MS
from cardapio.nucleo.facade import MealFacade
from cardapio.nucleo.utils import CategoryRow, MealRow, display_category, filter_meals
from cardapio.nucleo.workflow import AppState, MealWorkflow
from cardapio.view.category_dialog import CategoryDialog
from cardapio.view.constants import MEAL_COLDATA, THEME_NAME, UI_TEXTS

logger = logging.getLogger(__name__)


class MealApp(ttk.Window):
    """Janela principal do sistema de cardápio."""

    def __init__(self, database_url: Optional[str] = None):
        super().__init__(themename=THEME_NAME, title=UI_TEXTS["app_title"])
        self.geometry("900x650")
        self.protocol("WM_DELETE_WINDOW", self.on_close_app)

        self._facade: Optional[MealFacade] = None
        self._workflow: Optional[MealWorkflow] = None
        self._poll_after_id: Optional[str] = None
        self.state_data = AppState()
        # Opções do combobox: (rótulo, category_id)
        self._category_options: List[Tuple[str, int]] = []
        self._entries: Dict[str, ttk.Entry] = {}

        try:
            self._facade = MealFacade(database_url)
            self._workflow = MealWorkflow(self._facade, self, self.state_data)
        except Exception as e:  # pylint: disable=broad-exception-caught
            self._handle_initialization_error(e)
            return

        self._create_widgets()
        self._poll_workflow()
        self._workflow.refresh_categories()
        self._workflow.refresh_meals()

    def _handle_initialization_error(self, error: Exception):
        """Exibe erro crítico e encerra a aplicação."""
        logger.critical("Erro crítico de inicialização: %s", error, exc_info=True)
        messagebox.showerror(
            UI_TEXTS["initialization_error_title"],
            UI_TEXTS["initialization_error_message"].format(error=error),
            parent=self,
        )
        if self._facade:
            self._facade.close()
        self.destroy()
        sys.exit(1)

    # --- Construção da UI ---

    def _create_widgets(self):
        self.rowconfigure(1, weight=1)
        self.columnconfigure(0, weight=1)

        self._create_form_panel().grid(row=0, column=0, sticky=EW, padx=10, pady=10)
        self._create_table_panel().grid(row=1, column=0, sticky=NSEW, padx=10)

        status_bar = ttk.Frame(self, padding=(10, 5))
        status_bar.grid(row=2, column=0, sticky=EW)
        self._status_label = ttk.Label(status_bar, text=UI_TEXTS["status_ready"])
        self._status_label.pack(side=LEFT)

    def _create_form_panel(self) -> ttk.Labelframe:
        form = ttk.Labelframe(self, text=UI_TEXTS["form_group_label"], padding=10)
        form.columnconfigure(1, weight=1)

        campos = (
            ("meal_id", "meal_id_label"),
            ("meal_name", "meal_name_label"),
            ("calories", "calories_label"),
            ("price", "price_label"),
        )
        for row, (key, label_key) in enumerate(campos):
            ttk.Label(form, text=UI_TEXTS[label_key], anchor=W).grid(
                row=row, column=0, sticky=W, padx=(0, 10), pady=3
            )
            entry = ttk.Entry(form)
            entry.grid(row=row, column=1, sticky=EW, pady=3)
            self._entries[key] = entry

        ttk.Label(form, text=UI_TEXTS["category_label"], anchor=W).grid(
            row=4, column=0, sticky=W, padx=(0, 10), pady=3
        )
        self._category_combobox = ttk.Combobox(form, state="readonly")
        self._category_combobox.grid(row=4, column=1, sticky=EW, pady=3)

        buttons = ttk.Frame(form)
        buttons.grid(row=5, column=0, columnspan=2, sticky=EW, pady=(10, 0))
        acoes = (
            ("submit_button", self._submit_meal, "success"),
            ("delete_button", self._delete_meal, "danger"),
            ("refresh_button", self._refresh_meals, "info"),
            ("add_category_button", self._open_category_dialog, "primary"),
            ("export_button", self._export_meals, "secondary"),
        )
        for text_key, command, style in acoes:
            ttk.Button(
                buttons, text=UI_TEXTS[text_key], command=command, bootstyle=style
            ).pack(side=LEFT, padx=5, expand=True, fill=X)
        return form

    def _create_table_panel(self) -> ttk.Labelframe:
        panel = ttk.Labelframe(self, text=UI_TEXTS["table_group_label"], padding=10)
        panel.rowconfigure(1, weight=1)
        panel.columnconfigure(0, weight=1)

        search_frame = ttk.Frame(panel)
        search_frame.grid(row=0, column=0, sticky=EW, pady=(0, 5))
        ttk.Label(search_frame, text=UI_TEXTS["search_label"]).pack(side=LEFT, padx=(0, 5))
        self._search_var = tk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._render_meals())
        ttk.Entry(search_frame, textvariable=self._search_var).pack(
            side=RIGHT, fill=X, expand=True
        )

        container = ttk.Frame(panel)
        container.grid(row=1, column=0, sticky=NSEW)
        self._meal_table = Tableview(
            master=container,
            coldata=MEAL_COLDATA,
            rowdata=[],
            paginated=True,
            pagesize=20,
            bootstyle="primary",
            searchable=False,
        )
        self._meal_table.pack(expand=True, fill=BOTH)
        return panel

    # --- Fila de resultados ---

    def _poll_workflow(self):
        """Trata os resultados das threads de trabalho na thread da UI."""
        if self._workflow is None:
            return
        self._workflow.process_pending()
        self._poll_after_id = self.after(QUEUE_POLL_INTERVAL_MS, self._poll_workflow)

    # --- Ações do usuário ---

    def _selected_category_id(self) -> Optional[int]:
        index = self._category_combobox.current()
        if index < 0 or index >= len(self._category_options):
            return None
        return self._category_options[index][1]

    def _selected_meal(self) -> Optional[Tuple[int, str]]:
        selection = self._meal_table.view.selection()
        if not selection:
            return None
        values = self._meal_table.view.item(selection[0], "values")
        return int(values[0]), str(values[1])

    def _submit_meal(self):
        self._workflow.submit_meal(
            {
                "meal_id": self._entries["meal_id"].get(),
                "meal_name": self._entries["meal_name"].get(),
                "calories": self._entries["calories"].get(),
                "price": self._entries["price"].get(),
                "category_id": self._selected_category_id(),
            }
        )

    def _delete_meal(self):
        selected = self._selected_meal()
        if selected is None:
            self._workflow.delete_meal(None)
            return
        meal_id, meal_name = selected
        if messagebox.askyesno(
            UI_TEXTS["confirm_deletion_title"],
            UI_TEXTS["confirm_deletion_message"].format(name=meal_name),
            parent=self,
        ):
            self._workflow.delete_meal(meal_id)

    def _refresh_meals(self):
        self._workflow.refresh_meals()

    def _open_category_dialog(self):
        CategoryDialog(self, self._workflow)

    def _export_meals(self):
        file_path = filedialog.asksaveasfilename(
            parent=self, defaultextension=".xlsx", filetypes=[("Excel", "*.xlsx")]
        )
        if file_path:
            self._workflow.export_meals(file_path)

    def _render_meals(self):
        rows = filter_meals(self.state_data.meals, self._search_var.get())
        rowdata = [
            (
                row["meal_id"],
                row["meal_name"],
                display_category(row),
                row["calories"],
                f"{row['price']:.2f}",
            )
            for row in rows
        ]
        self._meal_table.build_table_data(MEAL_COLDATA, rowdata)

    # --- Callbacks do workflow (thread da UI) ---

    def on_status(self, text: str) -> None:
        self._status_label.config(text=text)

    def on_success(self, title: str, message: str) -> None:
        Messagebox.show_info(message, title, parent=self)

    def on_warning(self, title: str, message: str) -> None:
        Messagebox.show_warning(message, title, parent=self)

    def on_error(self, title: str, message: str) -> None:
        Messagebox.show_error(message, title, parent=self)

    def on_meals_changed(self, meals: List[MealRow]) -> None:
        logger.debug("Tabela de refeições atualizada (%d linhas).", len(meals))
        self._render_meals()

    def on_categories_changed(self, categories: List[CategoryRow]) -> None:
        self._category_options = [
            (c["category_name"], c["category_id"]) for c in categories
        ]
        self._category_combobox["values"] = [label for label, _ in self._category_options]
        if self._category_options:
            self._category_combobox.current(0)
        else:
            self._category_combobox.set("")

    def on_form_cleared(self) -> None:
        for entry in self._entries.values():
            entry.delete(0, tk.END)
        if self._category_options:
            self._category_combobox.current(0)

    # --- Encerramento ---

    def on_close_app(self):
        """Encerra o pool de trabalho, fecha o banco e destrói a janela."""
        logger.info("Sequência de fechamento da aplicação iniciada...")
        if self._poll_after_id is not None:
            try:
                self.after_cancel(self._poll_after_id)
            except tk.TclError:
                pass
        if self._workflow:
            self._workflow.shutdown()
        if self._facade:
            self._facade.close()
        try:
            self.destroy()
        except tk.TclError:
            pass
        logger.info("Aplicação finalizada.")
