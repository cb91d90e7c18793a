import zipfile
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from cardapio.nucleo.exceptions import ExportError, PersistenceError
from cardapio.nucleo.facade import MealFacade

# --- Fixtures Reutilizáveis ---


@pytest.fixture
def facade_instance():
    """
    Cria uma instância da MealFacade para cada teste, garantindo isolamento.
    Usa um banco de dados SQLite em memória.
    """
    facade = MealFacade("sqlite://")
    yield facade
    facade.close()


@pytest.fixture
def breakfast(facade_instance):
    facade_instance.insert_category(
        {"category_id": 1, "category_name": "Breakfast", "description": "Morning meals"}
    )
    return facade_instance


def _meal(meal_id=101, name="Oatmeal", calories=250, price=3.5, category_id=1):
    return {
        "meal_id": meal_id,
        "meal_name": name,
        "calories": calories,
        "price": price,
        "category_id": category_id,
    }


# --- Suítes de Testes ---


class TestFacadeLifecycle:
    """Testa a criação, o fechamento e o uso como gerenciador de contexto."""

    def test_facade_as_context_manager(self):
        """Testa o uso da fachada com 'with', garantindo que 'close' é chamado."""
        with patch("cardapio.nucleo.facade.MealFacade.close") as mock_close:
            with MealFacade("sqlite://"):
                pass
            mock_close.assert_called_once()

    def test_close_is_idempotent(self, facade_instance):
        facade_instance.close()
        facade_instance.close()
        assert facade_instance.closed

    def test_close_disposes_engine_once(self):
        facade = MealFacade("sqlite://")
        with patch.object(facade._engine, "dispose") as mock_dispose:
            facade.close()
            facade.close()
        mock_dispose.assert_called_once()

    @pytest.mark.parametrize(
        "operation, args",
        [
            ("list_meals", ()),
            ("list_categories", ()),
            ("delete_meal", (1,)),
            ("insert_meal", (_meal(),)),
        ],
    )
    def test_operations_after_close_fail(self, facade_instance, operation, args):
        facade_instance.close()
        with pytest.raises(PersistenceError, match="Database connection is not established"):
            getattr(facade_instance, operation)(*args)

    def test_file_database_persists_between_instances(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'sub' / 'cardapio.db'}"
        with MealFacade(url) as facade:
            facade.insert_meal(_meal(category_id=None))
        with MealFacade(url) as facade:
            assert [m["meal_id"] for m in facade.list_meals()] == [101]


class TestMealRoundTrip:
    """Gravação e leitura de refeições com o LEFT JOIN de categorias."""

    def test_insert_then_list_joins_category_name(self, breakfast):
        breakfast.insert_meal(_meal())

        assert breakfast.list_meals() == [
            {
                "meal_id": 101,
                "meal_name": "Oatmeal",
                "calories": 250,
                "price": 3.5,
                "category_id": 1,
                "category_name": "Breakfast",
            }
        ]

    def test_unknown_category_yields_no_name(self, facade_instance):
        facade_instance.insert_meal(_meal(category_id=42))

        (row,) = facade_instance.list_meals()
        assert row["category_id"] == 42
        assert row["category_name"] is None

    def test_meal_without_category(self, facade_instance):
        facade_instance.insert_meal(_meal(category_id=None))

        (row,) = facade_instance.list_meals()
        assert row["category_id"] is None
        assert row["category_name"] is None

    def test_list_is_idempotent(self, breakfast):
        breakfast.insert_meal(_meal(101))
        breakfast.insert_meal(_meal(102, "Pancakes", 400, 5.0))
        breakfast.insert_meal(_meal(103, "Salad", 150, 7.25, None))

        def key(row):
            return row["meal_id"]

        first = sorted(breakfast.list_meals(), key=key)
        second = sorted(breakfast.list_meals(), key=key)
        assert first == second
        assert [r["meal_id"] for r in first] == [101, 102, 103]

    def test_full_scenario_insert_list_delete(self, breakfast):
        breakfast.insert_meal(_meal())
        (row,) = breakfast.list_meals()
        assert (
            row["meal_id"],
            row["meal_name"],
            row["category_name"],
            row["calories"],
            row["price"],
        ) == (101, "Oatmeal", "Breakfast", 250, 3.5)

        breakfast.delete_meal(101)

        assert breakfast.list_meals() == []


class TestPersistenceErrors:
    """Violações de restrição e exclusões sem efeito."""

    def test_duplicate_meal_id_wraps_store_error(self, facade_instance):
        facade_instance.insert_meal(_meal())

        with pytest.raises(PersistenceError, match="Failed to insert meal") as exc_info:
            facade_instance.insert_meal(_meal(name="Another"))
        assert exc_info.value.__cause__ is not None

    def test_session_usable_after_failed_insert(self, facade_instance):
        facade_instance.insert_meal(_meal())
        with pytest.raises(PersistenceError):
            facade_instance.insert_meal(_meal())

        facade_instance.insert_meal(_meal(102, "Toast"))
        assert sorted(m["meal_id"] for m in facade_instance.list_meals()) == [101, 102]

    def test_driver_error_during_flush_leaves_session_usable(self, facade_instance):
        """Erros fora do SQLAlchemy também desfazem a transação."""
        with pytest.raises(OverflowError):
            facade_instance.insert_meal(_meal(meal_id=int("9" * 25)))

        assert facade_instance.list_meals() == []
        facade_instance.insert_meal(_meal(category_id=None))
        assert [m["meal_id"] for m in facade_instance.list_meals()] == [101]

    def test_unexpected_error_rolls_back(self, facade_instance):
        with patch(
            "cardapio.nucleo.repository.MealRepository.create",
            side_effect=RuntimeError("driver exploded"),
        ), patch.object(
            facade_instance._db_session,
            "rollback",
            wraps=facade_instance._db_session.rollback,
        ) as spy_rollback:
            with pytest.raises(RuntimeError, match="driver exploded"):
                facade_instance.insert_meal(_meal())
        spy_rollback.assert_called_once()
        assert facade_instance.list_meals() == []

    def test_delete_unknown_meal(self, facade_instance):
        facade_instance.insert_meal(_meal())

        with pytest.raises(PersistenceError, match="No meal found with ID: 999"):
            facade_instance.delete_meal(999)
        assert [m["meal_id"] for m in facade_instance.list_meals()] == [101]

    def test_duplicate_category_id(self, breakfast):
        with pytest.raises(PersistenceError, match="Failed to insert category"):
            breakfast.insert_category(
                {"category_id": 1, "category_name": "Lunch", "description": None}
            )

    def test_cause_text_is_appended(self, facade_instance):
        erro = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        with patch(
            "cardapio.nucleo.repository.MealRepository.create", side_effect=erro
        ):
            with pytest.raises(PersistenceError) as exc_info:
                facade_instance.insert_meal(_meal())
        assert "UNIQUE constraint failed" in str(exc_info.value)
        assert exc_info.value.__cause__ is erro

    def test_connection_error_on_read(self, facade_instance):
        erro = OperationalError("SELECT", {}, Exception("server has gone away"))
        with patch(
            "cardapio.nucleo.repository.MealRepository.list_with_category_name",
            side_effect=erro,
        ):
            with pytest.raises(PersistenceError, match="Failed to retrieve meals"):
                facade_instance.list_meals()

    def test_rollback_failure_does_not_mask_original_error(self, facade_instance):
        erro = OperationalError("SELECT", {}, Exception("lost connection"))
        with patch(
            "cardapio.nucleo.repository.CategoryRepository.read_all", side_effect=erro
        ), patch.object(
            facade_instance._db_session,
            "rollback",
            side_effect=OperationalError("ROLLBACK", {}, Exception("boom")),
        ):
            with pytest.raises(PersistenceError, match="lost connection"):
                facade_instance.list_categories()


class TestCategories:
    def test_insert_and_list_categories(self, breakfast):
        breakfast.insert_category(
            {"category_id": 2, "category_name": "Lunch", "description": None}
        )

        categories = sorted(breakfast.list_categories(), key=lambda c: c["category_id"])
        assert categories == [
            {"category_id": 1, "category_name": "Breakfast", "description": "Morning meals"},
            {"category_id": 2, "category_name": "Lunch", "description": None},
        ]


class TestExport:
    """Exportação da listagem para XLSX."""

    def test_export_writes_workbook(self, breakfast, tmp_path):
        breakfast.insert_meal(_meal())
        target = tmp_path / "meals.xlsx"

        path = breakfast.export_meals_to_xlsx(target)

        assert path == str(target)
        assert zipfile.is_zipfile(target)

    def test_export_default_path_uses_documents(self, facade_instance, tmp_path):
        with patch(
            "cardapio.nucleo.service_logic.get_documents_path", return_value=tmp_path
        ):
            path = facade_instance.export_meals_to_xlsx()
        assert path.startswith(str(tmp_path))
        assert path.endswith(".xlsx")

    def test_export_to_invalid_location(self, facade_instance, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(ExportError, match="Failed to export meals"):
            facade_instance.export_meals_to_xlsx(blocker / "meals.xlsx")
