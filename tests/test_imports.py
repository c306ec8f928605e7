from gateway import InMemoryTransactionRepository, SessionContext
from ledger.factory import build_transactions_page
from shared.models import FilterCriteria, FrequencyPreset


def test_imports_succeed() -> None:
    repository = InMemoryTransactionRepository(SessionContext(user_id="u1"))
    page = build_transactions_page(repository=repository)

    assert page.snapshot().transactions == ()
    assert FilterCriteria().frequency_preset == FrequencyPreset.LAST_7_DAYS
