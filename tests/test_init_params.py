"""
Tests for init parameter building
"""
import dataclasses
import re

import pytest

from zilswap_deploy.init_params import (
    DeploymentRequest,
    InitParam,
    fungible_token_init,
    generate_symbol,
    zilswap_init,
)

OWNER = "0x1Bf4A5e7C9d0A3B2f6e8D1c4B7a9E2f5C8d0B3a6"


def test_fungible_token_defaults():
    init = fungible_token_init(OWNER, name="ZS Test Token", decimals=12, supply=10**21)

    assert len(init) == 6
    assert [p.vname for p in init] == [
        "_scilla_version", "contract_owner", "name", "symbol", "decimals", "init_supply",
    ]
    assert init[0] == InitParam("_scilla_version", "Uint32", "0")
    assert init[1].type == "ByStr20"
    assert init[1].value == OWNER
    assert init[4].value == "12"
    assert init[5].value == "1000000000000000000000"
    assert init[5].type == "Uint128"
    assert re.fullmatch(r"TEST-[0-9A-F]{4}", init[3].value)


def test_fungible_token_explicit_symbol():
    init = fungible_token_init(OWNER, symbol="ZSWP")
    assert init[3].value == "ZSWP"


def test_generated_symbols_match_pattern():
    for _ in range(50):
        assert re.fullmatch(r"TEST-[0-9A-F]{4}", generate_symbol())


def test_zilswap_init_is_version_only():
    assert zilswap_init() == (InitParam("_scilla_version", "Uint32", "0"),)


def test_to_dict_uses_wire_names():
    assert InitParam("name", "String", "x").to_dict() == {"vname": "name", "type": "String", "value": "x"}


def test_deployment_request_is_frozen():
    init = [InitParam("_scilla_version", "Uint32", "0")]
    request = DeploymentRequest("aa" * 32, "contract X()", init)

    assert isinstance(request.init, tuple)
    assert request.init == tuple(init)
    assert request.init_json() == '[{"vname": "_scilla_version", "type": "Uint32", "value": "0"}]'
    assert "aa" * 32 not in repr(request)
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.code = "contract Y()"
