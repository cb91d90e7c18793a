# --- Arquivo: cardapio/nucleo/exceptions.py ---

"""Exceções customizadas para o núcleo do cardápio."""


class CoreError(Exception):
    """Classe base para exceções neste módulo."""


class ValidationError(CoreError):
    """
    Entrada rejeitada pela camada de validação.
    Sempre corrigível pelo usuário; nunca chega ao banco de dados.
    """


class PersistenceError(CoreError):
    """
    Falha ao acessar o banco: conexão indisponível, violação de restrição
    ou exclusão que não afetou nenhuma linha.
    """


class ExportError(CoreError):
    """Erro ao gravar a planilha de exportação das refeições."""
