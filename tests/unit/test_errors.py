"""Tests for ms_common.errors and ms_common.response."""

from src.ms_common.errors import (
    AccountCreationError,
    AccountDeletionError,
    AccountNotFoundError,
    AccountRetrievalError,
    AccountUpdateError,
    AppError,
    InternalError,
)
from src.ms_common.response import error_response, new_request_id, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=2002, message="Creation failed", http_status=400)
        assert err.http_status == 400

    def test_is_exception(self) -> None:
        err = AppError(code=2001, message="test")
        assert isinstance(err, Exception)


class TestAccountErrors:
    def test_retrieval(self) -> None:
        err = AccountRetrievalError("cust1")
        assert (err.code, err.http_status) == (2001, 500)
        assert "cust1" in err.message

    def test_creation(self) -> None:
        err = AccountCreationError("RO00AAA1")
        assert (err.code, err.http_status) == (2002, 400)
        assert "RO00AAA1" in err.message

    def test_update(self) -> None:
        err = AccountUpdateError("RO00AAA1")
        assert (err.code, err.http_status) == (2003, 400)

    def test_deletion(self) -> None:
        err = AccountDeletionError("RO00AAA1")
        assert (err.code, err.http_status) == (2004, 400)

    def test_not_found(self) -> None:
        err = AccountNotFoundError("delete", "RO00AAA1")
        assert (err.code, err.http_status) == (2005, 404)
        assert err.message == "Failed to delete account for IBAN: RO00AAA1"

    def test_internal(self) -> None:
        err = InternalError()
        assert (err.code, err.http_status) == (9002, 500)


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"iban": "RO00AAA1"})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"iban": "RO00AAA1"}

    def test_error(self) -> None:
        resp = error_response(2005, "Account not found")
        assert resp.code == 2005
        assert resp.data is None

    def test_request_id_shape(self) -> None:
        rid = new_request_id()
        assert rid.startswith("req_")
        assert len(rid) == 16
        assert success_response().request_id != success_response().request_id

    def test_serialization(self) -> None:
        d = success_response([]).model_dump()
        assert set(d) == {"code", "message", "data", "timestamp", "request_id"}
