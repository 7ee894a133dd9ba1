"""
Tests for contract source loading and compression
"""
import pytest

from conftest import TOKEN_SOURCE
from zilswap_deploy.source_loader import compress_code, load_contract, read_contract_source


def test_compress_strips_comments_and_whitespace():
    compressed = compress_code(TOKEN_SOURCE)
    assert "(*" not in compressed
    assert "\n" not in compressed
    assert "  " not in compressed
    assert "library FungibleToken contract FungibleToken(contract_owner: ByStr20)" in compressed


def test_compress_is_non_greedy():
    assert compress_code("a (* one *) b (* two *) c") == "a b c"


@pytest.mark.parametrize("source", [
    TOKEN_SOURCE,
    "x ((* inner *)* outer *) y",
    "\t(*\n*)\n\nfield  f : Uint32 = Uint32 0 \n",
    "",
])
def test_compress_is_idempotent(source):
    once = compress_code(source)
    assert compress_code(once) == once


def test_read_contract_source(tmp_path):
    path = tmp_path / "Token.scilla"
    path.write_text(TOKEN_SOURCE)
    assert read_contract_source(str(path)) == TOKEN_SOURCE


def test_load_contract_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_contract("Missing", str(tmp_path))


def test_load_contract_by_name(contracts_dir):
    assert load_contract("ZilSwap", contracts_dir).startswith("scilla_version 0")
