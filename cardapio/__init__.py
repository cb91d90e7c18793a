# SPDX-License-Identifier: MIT
# Copyright (c) 2024-2025 Mateus G Pereira <mateus.pereira@ifsp.edu.br>

"""Aplicação de cadastro de refeições e categorias (cardápio)."""

__version__ = "0.1.0"
