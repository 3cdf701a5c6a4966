"""
Integration tests for CustomerRepository against in-memory SQLite
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from customer_api.db.schema import customers, invoices, telephone_numbers
from customer_api.domain.entities import LoadShape, TelephoneNumberType
from customer_api.domain.exceptions import NotFoundError, PersistenceError
from tests.factories import make_customer, make_invoice, make_phone


def count_rows(engine, table):
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(table)).scalar_one()


def seed(repository, count):
    return [
        repository.create(make_customer(name=f"Company {i}", email=f"company{i}@company.com"))
        for i in range(1, count + 1)
    ]


class TestCreate:
    def test_assigns_id(self, customer_repository):
        customer = make_customer()

        result = customer_repository.create(customer)

        assert result.id is not None and result.id > 0
        assert result.name == "Test Company"
        assert result.email == "test@company.com"

    def test_creates_invoices_and_phone_numbers(self, customer_repository, engine):
        customer = make_customer(
            invoices=[make_invoice("INV-001", "100"), make_invoice("INV-002", "200")],
            phone_numbers=[make_phone("555-1234"), make_phone("555-5678", TelephoneNumberType.WORK)],
        )

        result = customer_repository.create(customer)

        assert len(result.invoices) == 2
        assert len(result.phone_numbers) == 2
        assert all(i.customer_id == result.id for i in result.invoices)
        assert all(p.customer_id == result.id for p in result.phone_numbers)
        assert all(i.id is not None for i in result.invoices)
        assert all(p.id is not None for p in result.phone_numbers)
        assert count_rows(engine, invoices) == 2
        assert count_rows(engine, telephone_numbers) == 2

    def test_duplicate_email_rejected_by_store(self, customer_repository):
        customer_repository.create(make_customer())

        with pytest.raises(PersistenceError) as exc_info:
            customer_repository.create(make_customer(name="Other"))

        assert exc_info.value.constraint_violation is True

    def test_failed_child_insert_rolls_back_everything(self, customer_repository, engine):
        customer_repository.create(make_customer(invoices=[make_invoice("INV-001")]))

        duplicate = make_customer(
            name="Second",
            email="second@company.com",
            invoices=[make_invoice("INV-002"), make_invoice("INV-001")],
            phone_numbers=[make_phone()],
        )
        with pytest.raises(PersistenceError):
            customer_repository.create(duplicate)

        assert duplicate.id is None
        assert customer_repository.email_exists("second@company.com") is False
        assert count_rows(engine, customers) == 1
        assert count_rows(engine, invoices) == 1
        assert count_rows(engine, telephone_numbers) == 0


class TestGetById:
    def test_existing_id(self, customer_repository):
        customer = customer_repository.create(make_customer())

        result = customer_repository.get_by_id(customer.id)

        assert result is not None
        assert result.id == customer.id
        assert result.name == customer.name

    def test_summary_leaves_children_unloaded(self, customer_repository):
        customer = customer_repository.create(make_customer(invoices=[make_invoice()]))

        result = customer_repository.get_by_id(customer.id, LoadShape.SUMMARY)

        assert result.invoices is None
        assert result.phone_numbers is None
        assert result.invoices_loaded is False

    def test_non_existing_id(self, customer_repository):
        assert customer_repository.get_by_id(999) is None

    def test_with_relations(self, customer_repository):
        customer = customer_repository.create(
            make_customer(invoices=[make_invoice()], phone_numbers=[make_phone()])
        )

        result = customer_repository.get_by_id(customer.id, LoadShape.WITH_RELATIONS)

        assert len(result.invoices) == 1
        assert len(result.phone_numbers) == 1
        assert result.invoices[0].invoice_number == "INV-001"
        assert result.phone_numbers[0].type is TelephoneNumberType.MOBILE

    def test_with_relations_and_no_children(self, customer_repository):
        customer = customer_repository.create(make_customer())

        result = customer_repository.get_by_id(customer.id, LoadShape.WITH_RELATIONS)

        assert result.invoices == []
        assert result.phone_numbers == []
        assert result.invoices_loaded is True


class TestGetAll:
    def test_returns_all_in_id_order(self, customer_repository):
        created = seed(customer_repository, 3)

        result = customer_repository.get_all()

        assert [c.id for c in result] == [c.id for c in created]

    def test_empty(self, customer_repository):
        assert customer_repository.get_all() == []

    def test_with_relations_keeps_children_with_their_owner(self, customer_repository):
        first = customer_repository.create(
            make_customer(name="First", email="first@company.com", invoices=[make_invoice("INV-001", "10")])
        )
        second = customer_repository.create(
            make_customer(
                name="Second",
                email="second@company.com",
                invoices=[make_invoice("INV-002", "20"), make_invoice("INV-003", "30")],
                phone_numbers=[make_phone()],
            )
        )

        by_id = {c.id: c for c in customer_repository.get_all(LoadShape.WITH_RELATIONS)}

        assert [i.invoice_number for i in by_id[first.id].invoices] == ["INV-001"]
        assert by_id[first.id].phone_numbers == []
        assert [i.invoice_number for i in by_id[second.id].invoices] == ["INV-002", "INV-003"]
        assert by_id[second.id].balance == Decimal("50")


class TestUpdate:
    def test_updates_name_and_email(self, customer_repository):
        customer = customer_repository.create(make_customer(name="Old Name", email="old@company.com"))

        customer.name = "New Name"
        customer.email = "new@company.com"
        customer_repository.update(customer)

        updated = customer_repository.get_by_id(customer.id)
        assert updated.name == "New Name"
        assert updated.email == "new@company.com"

    def test_unchanged_values_still_match(self, customer_repository):
        customer = customer_repository.create(make_customer())

        result = customer_repository.update(customer)

        assert result.id == customer.id
        assert customer_repository.get_by_id(customer.id).name == "Test Company"

    def test_does_not_touch_children(self, customer_repository):
        customer = customer_repository.create(make_customer(invoices=[make_invoice("INV-001", "75")]))

        customer.invoices = []
        customer.name = "Renamed"
        customer_repository.update(customer)

        reloaded = customer_repository.get_by_id(customer.id, LoadShape.WITH_RELATIONS)
        assert reloaded.name == "Renamed"
        assert len(reloaded.invoices) == 1
        assert reloaded.balance == Decimal("75")

    def test_missing_customer(self, customer_repository, engine):
        ghost = make_customer()
        ghost.id = 999

        with pytest.raises(NotFoundError):
            customer_repository.update(ghost)

        assert count_rows(engine, customers) == 0


class TestDelete:
    def test_existing_customer(self, customer_repository):
        customer = customer_repository.create(make_customer())

        assert customer_repository.delete(customer.id) is True
        assert customer_repository.get_by_id(customer.id) is None

    def test_non_existing_customer(self, customer_repository, engine):
        customer_repository.create(make_customer())

        assert customer_repository.delete(999) is False
        assert count_rows(engine, customers) == 1

    def test_cascades_to_invoices_and_phone_numbers(
        self, customer_repository, invoice_repository, telephone_number_repository, engine
    ):
        customer = customer_repository.create(
            make_customer(
                invoices=[make_invoice("INV-001"), make_invoice("INV-002")],
                phone_numbers=[make_phone("555-1234"), make_phone("555-5678")],
            )
        )
        invoice_ids = [i.id for i in customer.invoices]
        phone_ids = [p.id for p in customer.phone_numbers]

        assert customer_repository.delete(customer.id) is True

        assert all(invoice_repository.get_by_id(i) is None for i in invoice_ids)
        assert all(telephone_number_repository.get_by_id(p) is None for p in phone_ids)
        assert count_rows(engine, invoices) == 0
        assert count_rows(engine, telephone_numbers) == 0

    def test_leaves_other_customers_children(self, customer_repository, engine):
        keep = customer_repository.create(
            make_customer(name="Keep", email="keep@company.com", invoices=[make_invoice("INV-100")])
        )
        drop = customer_repository.create(make_customer(invoices=[make_invoice("INV-200")]))

        customer_repository.delete(drop.id)

        reloaded = customer_repository.get_by_id(keep.id, LoadShape.WITH_RELATIONS)
        assert [i.invoice_number for i in reloaded.invoices] == ["INV-100"]
        assert count_rows(engine, invoices) == 1


class TestExists:
    def test_existing(self, customer_repository):
        customer = customer_repository.create(make_customer())
        assert customer_repository.exists(customer.id) is True

    def test_non_existing(self, customer_repository):
        assert customer_repository.exists(999) is False


class TestEmailExists:
    def test_existing_email(self, customer_repository):
        customer_repository.create(make_customer())
        assert customer_repository.email_exists("test@company.com") is True

    def test_non_existing_email(self, customer_repository):
        assert customer_repository.email_exists("notfound@company.com") is False

    def test_excludes_given_customer(self, customer_repository):
        customer = customer_repository.create(make_customer())
        assert customer_repository.email_exists("test@company.com", exclude_id=customer.id) is False

    def test_exclusion_only_covers_that_customer(self, customer_repository):
        customer_repository.create(make_customer())
        other = customer_repository.create(make_customer(name="Other", email="other@company.com"))
        assert customer_repository.email_exists("test@company.com", exclude_id=other.id) is True

    def test_false_after_delete(self, customer_repository):
        customer = customer_repository.create(make_customer())
        customer_repository.delete(customer.id)
        assert customer_repository.email_exists("test@company.com") is False


class TestGetByEmail:
    def test_existing_email(self, customer_repository):
        customer_repository.create(make_customer())

        result = customer_repository.get_by_email("test@company.com")

        assert result is not None
        assert result.email == "test@company.com"

    def test_non_existing_email(self, customer_repository):
        assert customer_repository.get_by_email("notfound@company.com") is None


class TestGetPaged:
    def test_page_and_total_count(self, customer_repository):
        seed(customer_repository, 15)

        items, total = customer_repository.get_paged(page=2, page_size=5)

        assert total == 15
        assert len(items) == 5

    def test_pages_partition_all_customers(self, customer_repository):
        created = seed(customer_repository, 15)

        pages = [customer_repository.get_paged(page=p, page_size=5)[0] for p in (1, 2, 3)]
        ids = [c.id for page in pages for c in page]

        assert len(ids) == 15
        assert len(set(ids)) == 15
        assert sorted(ids) == sorted(c.id for c in created)

    def test_page_past_the_end(self, customer_repository):
        seed(customer_repository, 3)

        items, total = customer_repository.get_paged(page=5, page_size=5)

        assert items == []
        assert total == 3

    def test_with_relations(self, customer_repository):
        customer_repository.create(make_customer(invoices=[make_invoice("INV-001", "12.34")]))

        items, _ = customer_repository.get_paged(page=1, page_size=5, shape=LoadShape.WITH_RELATIONS)

        assert items[0].balance == Decimal("12.34")


class TestSearch:
    def test_by_name(self, customer_repository):
        customer_repository.create(make_customer(name="ABC Company", email="abc@company.com"))
        customer_repository.create(make_customer(name="XYZ Company", email="xyz@company.com"))
        customer_repository.create(make_customer(name="ABC Corp", email="corp@company.com"))

        result = customer_repository.search(name="ABC")

        assert len(result) == 2
        assert all("ABC" in c.name for c in result)

    def test_by_name_is_case_insensitive(self, customer_repository):
        customer_repository.create(make_customer(name="ABC Company", email="abc@company.com"))

        assert len(customer_repository.search(name="abc")) == 1

    def test_by_email(self, customer_repository):
        customer_repository.create(make_customer(name="Company 1", email="test@company.com"))
        customer_repository.create(make_customer(name="Company 2", email="info@company.com"))
        customer_repository.create(make_customer(name="Company 3", email="test@business.com"))

        result = customer_repository.search(email="company.com")

        assert len(result) == 2

    def test_wildcards_are_literal(self, customer_repository):
        customer_repository.create(make_customer(name="100% Cotton", email="cotton@company.com"))
        customer_repository.create(make_customer(name="Cotton Mill", email="mill@company.com"))

        result = customer_repository.search(name="100%")

        assert [c.name for c in result] == ["100% Cotton"]

    def test_by_min_balance(self, customer_repository):
        rich = customer_repository.create(
            make_customer(
                name="Rich",
                email="rich@company.com",
                invoices=[make_invoice("INV-001", "300"), make_invoice("INV-002", "250")],
            )
        )
        customer_repository.create(
            make_customer(name="Poor", email="poor@company.com", invoices=[make_invoice("INV-003", "50")])
        )
        customer_repository.create(make_customer(name="None", email="none@company.com"))

        result = customer_repository.search(min_balance=Decimal("500"))

        assert [c.id for c in result] == [rich.id]

    def test_min_balance_equal_to_fractional_total(self, customer_repository):
        exact = customer_repository.create(
            make_customer(
                name="Exact",
                email="exact@company.com",
                invoices=[make_invoice("INV-010", "0.10"), make_invoice("INV-070", "0.70")],
            )
        )
        customer_repository.create(
            make_customer(name="Short", email="short@company.com", invoices=[make_invoice("INV-079", "0.79")])
        )

        result = customer_repository.search(min_balance=Decimal("0.80"), shape=LoadShape.WITH_RELATIONS)

        assert [c.id for c in result] == [exact.id]
        assert result[0].balance == Decimal("0.80")

    def test_min_balance_agrees_with_derived_balance(self, customer_repository):
        amounts = ["0.10", "0.20", "0.30", "0.33", "19.99", "0.01"]
        created = customer_repository.create(
            make_customer(invoices=[make_invoice(f"INV-{i:03d}", a) for i, a in enumerate(amounts)])
        )
        balance = customer_repository.get_by_id(created.id, LoadShape.WITH_RELATIONS).balance

        assert balance == Decimal("20.93")
        assert [c.id for c in customer_repository.search(min_balance=balance)] == [created.id]
        assert customer_repository.search(min_balance=balance + Decimal("0.01")) == []

    def test_min_balance_zero_includes_customers_without_invoices(self, customer_repository):
        seed(customer_repository, 2)

        assert len(customer_repository.search(min_balance=Decimal("0"))) == 2

    def test_criteria_are_anded(self, customer_repository):
        customer_repository.create(
            make_customer(name="ABC Company", email="abc@company.com", invoices=[make_invoice("INV-001", "900")])
        )
        customer_repository.create(
            make_customer(name="ABC Corp", email="corp@company.com", invoices=[make_invoice("INV-002", "10")])
        )
        customer_repository.create(
            make_customer(name="XYZ Company", email="xyz@company.com", invoices=[make_invoice("INV-003", "900")])
        )

        result = customer_repository.search(name="ABC", min_balance=Decimal("100"))

        assert [c.name for c in result] == ["ABC Company"]

    def test_no_criteria_returns_everyone(self, customer_repository):
        seed(customer_repository, 4)

        assert len(customer_repository.search()) == 4


class TestBalance:
    def test_calculated_from_invoices(self, customer_repository):
        customer = customer_repository.create(
            make_customer(
                invoices=[
                    make_invoice("INV-001", "100"),
                    make_invoice("INV-002", "250"),
                    make_invoice("INV-003", "150"),
                ]
            )
        )

        result = customer_repository.get_by_id(customer.id, LoadShape.WITH_RELATIONS)

        assert result.balance == Decimal("500")
        assert result.balance == sum(i.amount for i in result.invoices)

    def test_no_invoices(self, customer_repository):
        customer = customer_repository.create(make_customer())

        result = customer_repository.get_by_id(customer.id, LoadShape.WITH_RELATIONS)

        assert result.balance == Decimal("0")

    def test_amounts_keep_two_decimals(self, customer_repository):
        customer = customer_repository.create(make_customer(invoices=[make_invoice("INV-001", "19.99")]))

        result = customer_repository.get_by_id(customer.id, LoadShape.WITH_RELATIONS)

        assert result.invoices[0].amount == Decimal("19.99")
        assert result.balance == Decimal("19.99")
