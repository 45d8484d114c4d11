"""
Error Taxonomy Unit Tests
Tests for sumtree/schemas/errors.py
"""
import pytest

from sumtree.merkle import build_sum_tree
from sumtree.schemas.errors import (
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidLeafCountException,
    ProofDecodeException,
    SumOverflowException,
    SumTreeError,
    SumTreeException,
    ValueOutOfRangeException,
)


class TestErrorModel:
    """Tests for SumTreeError <-> SumTreeException conversion."""

    def test_exception_to_model(self):
        exc = SumTreeException("boom", code="X", details={"a": 1})
        model = exc.to_error_model()

        assert model.code == "X"
        assert model.message == "boom"
        assert model.details == {"a": 1}
        assert model.retryable is False

    def test_model_to_exception(self):
        model = SumTreeError(code=ErrorCodes.SUM_OVERFLOW, message="too big")
        exc = model.to_exception()

        assert isinstance(exc, SumTreeException)
        assert exc.code == ErrorCodes.SUM_OVERFLOW
        assert str(exc) == "too big"

    def test_default_code(self):
        assert SumTreeException("x").code == "SUMTREE_ERROR"

    def test_repr(self):
        assert repr(ProofDecodeException("bad")) == (
            "ProofDecodeException(code='PROOF_DECODE_ERROR', message='bad')"
        )


class TestExceptionTypes:
    """Each construction error carries its code and the offending input."""

    def test_invalid_leaf_count(self):
        exc = InvalidLeafCountException(3)

        assert exc.code == ErrorCodes.INVALID_LEAF_COUNT
        assert exc.leaf_count == 3
        assert "power of two" in exc.message

    def test_index_out_of_range_is_index_error(self):
        exc = IndexOutOfRangeException(8, 8)

        assert isinstance(exc, IndexError)
        assert exc.details == {"position": 8, "leaf_count": 8}

    def test_value_out_of_range_is_value_error(self):
        exc = ValueOutOfRangeException(-1, position=2)

        assert isinstance(exc, ValueError)
        assert exc.details["position"] == 2
        assert exc.details["value"] == "-1"

    def test_sum_overflow_is_overflow_error(self):
        exc = SumOverflowException(1)

        assert isinstance(exc, OverflowError)
        assert exc.code == ErrorCodes.SUM_OVERFLOW

    def test_caught_as_base_type(self):
        with pytest.raises(SumTreeException) as exc_info:
            build_sum_tree([1, 2, 3])
        assert exc_info.value.code == ErrorCodes.INVALID_LEAF_COUNT
