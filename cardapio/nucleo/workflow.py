# ----------------------------------------------------------------------------
# File: cardapio/nucleo/workflow.py (Orquestração das Ações do Usuário)
# ----------------------------------------------------------------------------
# SPDX-License-Identifier: MIT
# Copyright (c) 2024-2025 Mateus G Pereira <mateus.pereira@ifsp.edu.br>
"""
Orquestra as ações da interface: valida os formulários, despacha as
chamadas bloqueantes da Fachada para um pool fixo de threads e devolve os
resultados para a thread da interface por meio de uma fila de mensagens.

As threads de trabalho nunca tocam no estado da aplicação nem no ouvinte
(a interface); elas apenas colocam mensagens na fila. A thread da
interface chama `process_pending()` periodicamente (ex: via `after()` do
Tk) e é a única que altera `AppState` e notifica o ouvinte.
"""
import logging
import queue
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol

from cardapio.nucleo.constants import WORKER_POOL_SIZE, WORKER_THREAD_PREFIX
from cardapio.nucleo.exceptions import ValidationError
from cardapio.nucleo.facade import MealFacade
from cardapio.nucleo.utils import CATEGORY_FORM, MEAL_FORM, CategoryRow, MealRow
from cardapio.nucleo.validation import parse_category_form, parse_meal_form

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Etapas de uma ação do usuário."""

    IDLE = "idle"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    REFRESHING = "refreshing"
    REJECTED = "rejected"
    FAILED = "failed"


class OutcomeStatus(Enum):
    SUCCEEDED = "succeeded"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass
class Outcome:
    """Resultado final de uma ação, entregue na thread da interface."""

    status: OutcomeStatus
    message: str = ""
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED


@dataclass
class AppState:
    """Estado da aplicação compartilhado por referência entre UI e workflow."""

    meals: List[MealRow] = field(default_factory=list)
    categories: List[CategoryRow] = field(default_factory=list)
    status: str = "Ready"


class WorkflowListener(Protocol):
    """Callbacks que a camada de apresentação implementa."""

    def on_status(self, text: str) -> None: ...
    def on_success(self, title: str, message: str) -> None: ...
    def on_warning(self, title: str, message: str) -> None: ...
    def on_error(self, title: str, message: str) -> None: ...
    def on_meals_changed(self, meals: List[MealRow]) -> None: ...
    def on_categories_changed(self, categories: List[CategoryRow]) -> None: ...
    def on_form_cleared(self) -> None: ...


class MealWorkflow:
    """
    Coordena validação → persistência → atualização do modelo de leitura.

    Cada ação pública retorna um `Future[Outcome]` resolvido na thread da
    interface, depois que o estado foi atualizado e o ouvinte notificado.
    Nenhuma ação é repetida automaticamente e não há cancelamento.
    """

    def __init__(
        self,
        facade: MealFacade,
        listener: WorkflowListener,
        state: Optional[AppState] = None,
        executor: Optional[Executor] = None,
        pool_size: int = WORKER_POOL_SIZE,
    ):
        self._facade = facade
        self._listener = listener
        self.state = state if state is not None else AppState()
        self._executor = executor or ThreadPoolExecutor(
            max_workers=pool_size, thread_name_prefix=WORKER_THREAD_PREFIX
        )
        self._messages: "queue.Queue[tuple[Callable[..., None], tuple]]" = queue.Queue()
        self._pending = 0
        self._is_shut_down = False
        self.phases: Dict[str, Phase] = {}

    # --- Infraestrutura de despacho ---

    @property
    def pending(self) -> int:
        """Quantidade de tarefas despachadas cujo resultado ainda não foi tratado."""
        return self._pending

    def _set_phase(self, action: str, phase: Phase):
        logger.debug("%s: %s -> %s", action, self.phases.get(action, Phase.IDLE), phase)
        self.phases[action] = phase

    def _update_status(self, text: str):
        self.state.status = text
        self._listener.on_status(text)

    def _dispatch(
        self,
        action: str,
        job: Callable[[], Any],
        on_success: Callable[[Any], Outcome],
        failure_context: str,
    ) -> "Future[Outcome]":
        """Envia `job` ao pool; o resultado volta pela fila de mensagens."""
        if self._is_shut_down:
            raise RuntimeError("O workflow já foi encerrado.")

        future: "Future[Outcome]" = Future()

        def run():
            try:
                value = job()
            except Exception as e:  # pylint: disable=broad-exception-caught
                self._messages.put(
                    (self._job_failed, (future, action, failure_context, e))
                )
            else:
                self._messages.put((self._job_done, (future, on_success, value)))

        self._pending += 1
        self._executor.submit(run)
        return future

    def _job_done(self, future: Future, on_success: Callable[[Any], Outcome], value: Any):
        future.set_result(on_success(value))

    def _job_failed(self, future: Future, action: str, context: str, error: Exception):
        self._set_phase(action, Phase.FAILED)
        self._report_failure(context, error)
        self._set_phase(action, Phase.IDLE)
        future.set_result(Outcome(OutcomeStatus.FAILED, str(error)))

    def _handle(self, handler: Callable[..., None], args: tuple):
        self._pending -= 1
        handler(*args)

    def process_pending(self) -> int:
        """
        Trata todas as mensagens já entregues pelas threads de trabalho.
        Deve ser chamado apenas pela thread da interface. Retorna quantas
        mensagens foram tratadas.
        """
        handled = 0
        while True:
            try:
                handler, args = self._messages.get_nowait()
            except queue.Empty:
                return handled
            self._handle(handler, args)
            handled += 1

    def wait_for_pending(self, timeout: Optional[float] = None):
        """
        Bloqueia tratando mensagens até que nenhuma tarefa esteja pendente,
        incluindo as atualizações disparadas em cadeia.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while self._pending > 0:
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                raise TimeoutError(f"{self._pending} tarefa(s) ainda pendente(s).")
            try:
                handler, args = self._messages.get(timeout=remaining)
            except queue.Empty as e:
                raise TimeoutError(
                    f"{self._pending} tarefa(s) ainda pendente(s)."
                ) from e
            self._handle(handler, args)

    def shutdown(self, wait: bool = True):
        """Para de aceitar novas tarefas e encerra o pool de threads."""
        if self._is_shut_down:
            return
        self._is_shut_down = True
        logger.info("Encerrando pool de trabalho (%d pendente(s)).", self._pending)
        self._executor.shutdown(wait=wait)

    def _reject(self, action: str, title: str, message: str) -> "Future[Outcome]":
        self._set_phase(action, Phase.REJECTED)
        logger.info("%s rejeitado: %s", action, message)
        self._listener.on_warning(title, message)
        self._set_phase(action, Phase.IDLE)
        future: "Future[Outcome]" = Future()
        future.set_result(Outcome(OutcomeStatus.REJECTED, message))
        return future

    def _report_failure(self, context: str, error: Exception):
        logger.error("%s: %s", context, error, exc_info=error)
        self._update_status(f"Error: {context}")
        self._listener.on_error("Error", f"{context}\n{error}")

    # --- Ações ---

    def refresh_meals(self) -> "Future[Outcome]":
        """Recarrega toda a lista de refeições (sem validação)."""
        self._update_status("Loading meals...")
        self._set_phase("refresh_meals", Phase.PERSISTING)
        return self._dispatch(
            "refresh_meals",
            self._facade.list_meals,
            self._meals_loaded,
            "Error loading meals",
        )

    def _meals_loaded(self, meals: List[MealRow]) -> Outcome:
        self.state.meals = list(meals)
        self._listener.on_meals_changed(self.state.meals)
        self._update_status("Meals loaded successfully.")
        self._set_phase("refresh_meals", Phase.IDLE)
        return Outcome(OutcomeStatus.SUCCEEDED, data=self.state.meals)

    def refresh_categories(self) -> "Future[Outcome]":
        """Recarrega toda a lista de categorias (sem validação)."""
        self._update_status("Loading categories...")
        self._set_phase("refresh_categories", Phase.PERSISTING)
        return self._dispatch(
            "refresh_categories",
            self._facade.list_categories,
            self._categories_loaded,
            "Error loading categories",
        )

    def _categories_loaded(self, categories: List[CategoryRow]) -> Outcome:
        self.state.categories = list(categories)
        self._listener.on_categories_changed(self.state.categories)
        self._update_status("Categories loaded successfully.")
        self._set_phase("refresh_categories", Phase.IDLE)
        return Outcome(OutcomeStatus.SUCCEEDED, data=self.state.categories)

    def submit_meal(self, form: MEAL_FORM) -> "Future[Outcome]":
        """Valida e grava uma refeição; em caso de sucesso recarrega a lista."""
        action = "submit_meal"
        self._set_phase(action, Phase.VALIDATING)
        try:
            payload = parse_meal_form(form)
        except ValidationError as e:
            return self._reject(action, "Validation Error", str(e))

        self._update_status("Submitting meal...")
        self._set_phase(action, Phase.PERSISTING)
        return self._dispatch(
            action,
            partial(self._facade.insert_meal, payload),
            partial(self._meal_submitted, payload),
            "Error adding meal",
        )

    def _meal_submitted(self, payload, _result) -> Outcome:
        action = "submit_meal"
        self._set_phase(action, Phase.REFRESHING)
        refresh = self.refresh_meals()
        refresh.add_done_callback(lambda _: self._set_phase(action, Phase.IDLE))
        self._listener.on_form_cleared()
        self._update_status("Meal added successfully.")
        self._listener.on_success("Success", "Meal Added Successfully!")
        return Outcome(OutcomeStatus.SUCCEEDED, "Meal Added Successfully!", payload)

    def delete_meal(self, selected_meal_id: Optional[int]) -> "Future[Outcome]":
        """Remove a refeição selecionada e retira apenas essa linha do estado."""
        action = "delete_meal"
        if selected_meal_id is None:
            return self._reject(
                action, "Selection Error", "Please select a meal to delete!"
            )

        self._update_status("Deleting meal...")
        self._set_phase(action, Phase.PERSISTING)
        return self._dispatch(
            action,
            partial(self._facade.delete_meal, selected_meal_id),
            partial(self._meal_deleted, selected_meal_id),
            "Error deleting meal",
        )

    def _meal_deleted(self, meal_id: int, _result) -> Outcome:
        for index, row in enumerate(self.state.meals):
            if row["meal_id"] == meal_id:
                del self.state.meals[index]
                break
        self._listener.on_meals_changed(self.state.meals)
        self._update_status("Meal deleted successfully.")
        self._listener.on_success("Success", "Meal Deleted Successfully!")
        self._set_phase("delete_meal", Phase.IDLE)
        return Outcome(OutcomeStatus.SUCCEEDED, "Meal Deleted Successfully!", meal_id)

    def add_category(self, form: CATEGORY_FORM) -> "Future[Outcome]":
        """Valida e grava uma categoria; em caso de sucesso recarrega as categorias."""
        action = "add_category"
        self._set_phase(action, Phase.VALIDATING)
        try:
            payload = parse_category_form(form)
        except ValidationError as e:
            return self._reject(action, "Validation Error", str(e))

        self._update_status("Adding category...")
        self._set_phase(action, Phase.PERSISTING)
        return self._dispatch(
            action,
            partial(self._facade.insert_category, payload),
            partial(self._category_added, payload),
            "Error adding category",
        )

    def _category_added(self, payload, _result) -> Outcome:
        action = "add_category"
        self._set_phase(action, Phase.REFRESHING)
        refresh = self.refresh_categories()
        refresh.add_done_callback(lambda _: self._set_phase(action, Phase.IDLE))
        self._listener.on_success("Success", "Category Added Successfully!")
        return Outcome(OutcomeStatus.SUCCEEDED, "Category Added Successfully!", payload)

    def export_meals(self, file_path: Optional[Path] = None) -> "Future[Outcome]":
        """Exporta as refeições para XLSX no pool de trabalho."""
        action = "export_meals"
        self._update_status("Exporting meals...")
        self._set_phase(action, Phase.PERSISTING)
        return self._dispatch(
            action,
            partial(self._facade.export_meals_to_xlsx, file_path),
            self._meals_exported,
            "Error exporting meals",
        )

    def _meals_exported(self, path: str) -> Outcome:
        self._update_status(f"Meals exported to {path}")
        self._listener.on_success("Export Complete", f"Meals exported to:\n{path}")
        self._set_phase("export_meals", Phase.IDLE)
        return Outcome(OutcomeStatus.SUCCEEDED, path, path)
