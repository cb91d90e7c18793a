"""Camada de apresentação (ttkbootstrap) do cardápio."""
