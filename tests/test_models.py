from datetime import datetime, timezone

from rtwire_payments import PENDING, Account, Fee, Hook, Transaction, TransactionEvent


def test_transaction_from_payload_maps_wire_names():
    tx = Transaction.from_payload(
        {
            "id": 5,
            "type": "debit",
            "fromAccountID": 1,
            "fromAccountBalance": 3,
            "fromAccountTxID": 2,
            "value": 7,
            "created": "2017-05-01T12:00:00Z",
            "txHashes": ["aa"],
            "txOutIndex": 2,
        }
    )
    assert tx.from_account_id == 1
    assert tx.to_account_id == 0
    assert tx.from_account_balance == 3
    assert tx.from_account_tx_id == 2
    assert tx.created == datetime(2017, 5, 1, 12, tzinfo=timezone.utc)
    assert tx.tx_hashes == ("aa",)
    assert tx.to_dict()["created"] == "2017-05-01T12:00:00Z"
    assert tx.to_dict()["txHashes"] == ["aa"]


def test_issued_id_stub_only_has_id():
    tx = Transaction.from_payload({"id": 99, "txHashes": None, "created": "0001-01-01T00:00:00Z"})
    assert tx.id == 99
    assert tx.type == ""
    assert tx.tx_hashes == ()


def test_event_status():
    event = TransactionEvent.from_payload({"id": 1, "status": PENDING})
    assert event.is_pending
    assert event.to_dict()["status"] == PENDING
    assert isinstance(event, Transaction)


def test_simple_models():
    assert Account.from_payload({"id": 4}).balance == 0
    assert Fee.from_payload({"feePerByte": 1, "blockHeight": 2}).to_dict() == {
        "feePerByte": 1,
        "blockHeight": 2,
    }
    assert Hook.from_payload({"url": "u"}) == Hook(url="u")


def test_null_numbers_decode_as_zero():
    event = TransactionEvent.from_payload(
        {
            "id": 8,
            "type": "credit",
            "fromAccountID": None,
            "toAccountID": 3,
            "fromAccountBalance": None,
            "toAccountBalance": None,
            "fromAccountTxID": None,
            "toAccountTxID": None,
            "value": None,
            "txOutIndex": None,
        }
    )
    assert event.from_account_id == 0
    assert event.from_account_balance == 0
    assert event.to_account_balance == 0
    assert event.value == 0
    assert event.tx_out_index == 0
    assert Account.from_payload({"id": 4, "balance": None}).balance == 0
    assert Fee.from_payload({"feePerByte": None, "blockHeight": None}).fee_per_byte == 0
