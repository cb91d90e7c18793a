# SPDX-License-Identifier: MIT
# Copyright (c) 2024-2025 Mateus G Pereira <mateus.pereira@ifsp.edu.br>

"""
Ponto de entrada da aplicação de cardápio.

Configura o logging (arquivo + console) e inicia a janela principal.
"""
import logging
import sys

from cardapio.nucleo.constants import LOG_DIR, LOG_FILE_NAME, LOG_FORMAT, LOG_LEVEL


def configure_logging():
    """Envia o log para `logs/cardapio.log` e para o console."""
    handlers: list = [logging.StreamHandler(sys.stderr)]
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(LOG_DIR / LOG_FILE_NAME, encoding="utf-8"))
    except OSError as e:
        print(f"Não foi possível abrir o arquivo de log: {e}", file=sys.stderr)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, handlers=handlers)


def main():
    configure_logging()
    try:
        import tkinter  # noqa: F401  pylint: disable=import-outside-toplevel,unused-import
    except ModuleNotFoundError:
        raise SystemExit(
            "Tkinter não encontrado. No Linux instale o pacote 'python3-tk'."
        )

    from cardapio.view.meal_app import MealApp  # pylint: disable=import-outside-toplevel

    app = MealApp()
    app.mainloop()


if __name__ == "__main__":
    main()
