"""Tests for node error descriptions."""

from clashdeploy.evm import _describe_rpc_error


def test_insufficient_funds():
    message = _describe_rpc_error(ValueError("err: insufficient funds for transfer"))

    assert message.startswith("insufficient funds for gas * price + value")


def test_number_containing_500_is_not_a_server_error():
    error = ValueError("nonce too low: next nonce 1500, tx nonce 3")

    assert _describe_rpc_error(error) == "nonce too low: next nonce 1500, tx nonce 3"


def test_http_500_is_described():
    error = ValueError("500 Server Error: Internal Server Error for url: https://arb1.arbitrum.io/rpc")

    assert "RPC endpoint returned 500" in _describe_rpc_error(error)


def test_build_errors_skip_server_error_check():
    error = ValueError("500 Server Error: Internal Server Error")

    assert _describe_rpc_error(error, check_server_error=False) == str(error)
