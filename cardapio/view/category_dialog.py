# ----------------------------------------------------------------------------
# File: cardapio/view/category_dialog.py (Diálogo de Nova Categoria)
# ----------------------------------------------------------------------------
# SPDX-License-Identifier: MIT
# Copyright (c) 2024-2025 Mateus G Pereira <mateus.pereira@ifsp.edu.br>
"""
Diálogo modal para cadastrar uma categoria de refeições.
"""
import logging
import tkinter as tk
from concurrent.futures import Future

import ttkbootstrap as ttk
from ttkbootstrap.constants import BOTH, EW, E, W

from cardapio.nucleo.workflow import MealWorkflow, Outcome
from cardapio.view.constants import UI_TEXTS

logger = logging.getLogger(__name__)


class CategoryDialog(ttk.Toplevel):
    """Coleta ID, nome e descrição e envia ao workflow; fecha ao gravar."""

    def __init__(self, parent, workflow: MealWorkflow):
        super().__init__(parent)
        self.transient(parent)
        self.grab_set()
        self.title(UI_TEXTS["category_dialog_title"])

        self.workflow = workflow

        self._create_widgets()

        self.protocol("WM_DELETE_WINDOW", self._on_cancel)
        self.wait_window(self)

    def _create_widgets(self):
        main_frame = ttk.Frame(self, padding=20)
        main_frame.pack(expand=True, fill=BOTH)
        main_frame.columnconfigure(1, weight=1)

        campos = (
            ("category_id_label", "id_entry"),
            ("category_name_label", "name_entry"),
            ("description_label", "description_entry"),
        )
        for row, (label_key, attr) in enumerate(campos):
            ttk.Label(main_frame, text=UI_TEXTS[label_key], anchor=W).grid(
                row=row, column=0, sticky=W, padx=(0, 10), pady=5
            )
            entry = ttk.Entry(main_frame, width=30)
            entry.grid(row=row, column=1, sticky=EW, pady=5)
            setattr(self, attr, entry)

        ttk.Separator(main_frame, orient=tk.HORIZONTAL).grid(
            row=3, column=0, columnspan=2, sticky=EW, pady=10
        )

        btn_frame = ttk.Frame(main_frame)
        btn_frame.grid(row=4, column=0, columnspan=2, sticky=EW)
        btn_frame.columnconfigure(0, weight=1)
        btn_frame.columnconfigure(1, weight=1)

        ttk.Button(
            btn_frame,
            text=UI_TEXTS["cancel_button"],
            command=self._on_cancel,
            bootstyle="outline",
        ).grid(row=0, column=0, sticky=W)
        self.save_button = ttk.Button(
            btn_frame,
            text=UI_TEXTS["save_button"],
            command=self._on_save,
            bootstyle="success",
        )
        self.save_button.grid(row=0, column=1, sticky=E)

        self.id_entry.focus_set()

    def _on_save(self):
        self.save_button.config(state="disabled")
        future = self.workflow.add_category(
            {
                "category_id": self.id_entry.get(),
                "category_name": self.name_entry.get(),
                "description": self.description_entry.get(),
            }
        )
        future.add_done_callback(self._on_saved)

    def _on_saved(self, future: "Future[Outcome]"):
        if not self.winfo_exists():
            return
        if future.result().ok:
            logger.info("Categoria gravada; fechando diálogo.")
            self.destroy()
            return
        self.save_button.config(state="normal")

    def _on_cancel(self):
        self.destroy()
