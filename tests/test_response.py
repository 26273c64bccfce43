# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for the RIS response reader."""

from ris_client.response import RisResponse


def test_parses_pairs():
    response = RisResponse("VERS=0695\nMODE=Q\nTRAN=P04S03NB1D3X\nSCOR=34\n")
    assert response.mode == "Q"
    assert response.transaction_id == "P04S03NB1D3X"
    assert response.get_param("SCOR") == "34"
    assert response.get_param("AUTO") is None
    assert not response.has_errors()


def test_value_may_contain_equals():
    response = RisResponse("REASON_CODE=a=b\r\n")
    assert response.get_param("REASON_CODE") == "a=b"


def test_empty_value():
    assert RisResponse("GEOX=\n").get_param("GEOX") == ""


def test_malformed_lines_ignored():
    response = RisResponse("MODE=E\nnot a pair\n\n")
    assert response.params == {"MODE": "E"}


def test_errors_in_index_order():
    response = RisResponse(
        "MODE=E\nERROR_10=323 BAD_EMAL\nERROR_0=201 MISSING_VERS\nERROR_2=202 BAD_MODE\nERROR_CNT=3\n"
    )
    assert response.has_errors()
    assert response.errors == ["201 MISSING_VERS", "202 BAD_MODE", "323 BAD_EMAL"]


def test_warnings():
    response = RisResponse("WARNING_1=399 BAD_OPTN_FIELD\nWARNING_0=311 BAD_SHTP\nWARNING_CNT=2\n")
    assert response.warnings == ["311 BAD_SHTP", "399 BAD_OPTN_FIELD"]
    assert response.errors == []


def test_params_is_a_copy():
    response = RisResponse("MODE=Q\n")
    response.params["MODE"] = "X"
    assert response.mode == "Q"
    assert response.raw == "MODE=Q\n"
