"""Tests for scoring endpoints."""

import pytest
from httpx import AsyncClient


def quantitative_payload(**overrides) -> dict:
    payload = {
        "criterion": {
            "id": "c1",
            "name": "Cases solved",
            "criteria_type": 1,
            "max_score": 10,
            "formula_type": 4,
        },
        "result": {"criteria_id": "c1", "unit_id": "u1", "actual_value": 15},
        "target": {"target_value": 10},
    }
    payload.update(overrides)
    return payload


class TestCalculateEndpoint:
    """Tests for POST /v1/scores/calculate."""

    @pytest.mark.asyncio
    async def test_quantitative_with_leader(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/scores/calculate", json=quantitative_payload(leader_actual=20)
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"score": 7.5}

    @pytest.mark.asyncio
    async def test_leader_found_from_cluster_results(self, client: AsyncClient) -> None:
        payload = quantitative_payload(
            cluster_results=[
                {"unit_id": "u1", "actual_value": 15},
                {"unit_id": "u2", "actual_value": 20},
                {"unit_id": "u3", "actual_value": 20},
            ]
        )
        response = await client.post("/v1/scores/calculate", json=payload)

        body = response.json()
        assert body["data"]["score"] == 7.5
        assert body["meta"]["cluster_leader"] == {"unit_id": "u2", "actual_value": 20}

    @pytest.mark.asyncio
    async def test_missing_target_scores_zero(self, client: AsyncClient) -> None:
        response = await client.post("/v1/scores/calculate", json=quantitative_payload(target=None))

        assert response.status_code == 200
        assert response.json()["data"]["score"] == 0

    @pytest.mark.asyncio
    async def test_decimal_strings_accepted(self, client: AsyncClient) -> None:
        """Stored decimals arrive as strings."""
        payload = quantitative_payload(target={"target_value": "10.00"}, leader_actual="20")
        payload["criterion"]["max_score"] = "10.00"
        response = await client.post("/v1/scores/calculate", json=payload)

        assert response.json()["data"]["score"] == 7.5

    @pytest.mark.asyncio
    async def test_fixed_score_detail(self, client: AsyncClient) -> None:
        payload = {
            "criterion": {"id": "c3", "criteria_type": 3, "max_score": 10},
            "result": {"actual_value": 5},
            "formula_detail": {
                "kind": "fixed_score",
                "point_per_unit": 2.5,
                "max_score_limit": 10,
            },
        }
        response = await client.post("/v1/scores/calculate", json=payload)

        assert response.json()["data"]["score"] == 10

    @pytest.mark.asyncio
    async def test_bonus_penalty_detail(self, client: AsyncClient) -> None:
        payload = {
            "criterion": {"id": "c4", "criteria_type": 4, "max_score": 10},
            "result": {"bonus_count": 3, "penalty_count": 1},
            "formula_detail": {"kind": "bonus_penalty", "bonus_point": 2, "penalty_point": 1},
        }
        response = await client.post("/v1/scores/calculate", json=payload)

        assert response.json()["data"]["score"] == 5

    @pytest.mark.asyncio
    async def test_negative_max_score_rejected(self, client: AsyncClient) -> None:
        payload = quantitative_payload()
        payload["criterion"]["max_score"] = -1
        response = await client.post("/v1/scores/calculate", json=payload)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "validation_error"
        assert error["field"] == "criterion.max_score"

    @pytest.mark.asyncio
    async def test_unknown_detail_kind_rejected(self, client: AsyncClient) -> None:
        payload = quantitative_payload(formula_detail={"kind": "mystery"})
        response = await client.post("/v1/scores/calculate", json=payload)

        assert response.status_code == 422


class TestEvaluatorEndpoints:
    """Tests for the direct evaluator endpoints."""

    @pytest.mark.asyncio
    async def test_quantitative(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/scores/quantitative",
            json={"actual": 11, "target": 10, "max_score": 8, "formula_type": 3},
        )
        assert response.json()["data"]["score"] == 8

    @pytest.mark.asyncio
    async def test_qualitative(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/scores/qualitative", json={"is_achieved": False, "max_score": 5}
        )
        assert response.json()["data"]["score"] == 0

    @pytest.mark.asyncio
    async def test_fixed(self, client: AsyncClient) -> None:
        response = await client.post("/v1/scores/fixed", json={"count": 3, "point_per_unit": 2.5})
        assert response.json()["data"]["score"] == 7.5

    @pytest.mark.asyncio
    async def test_bonus_penalty_min_clamp(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/scores/bonus-penalty",
            json={
                "bonus_count": 3,
                "penalty_count": 1,
                "bonus_point": 2,
                "penalty_point": 1,
                "min_score": 10,
            },
        )
        assert response.json()["data"]["score"] == 10

    @pytest.mark.asyncio
    async def test_parent(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/scores/parent", json={"children_scores": [1.5, 2.25, 0]}
        )
        assert response.json()["data"]["score"] == 3.75

    @pytest.mark.asyncio
    async def test_parent_with_huge_scores(self, client: AsyncClient) -> None:
        response = await client.post("/v1/scores/parent", json={"children_scores": [1e27]})

        assert response.status_code == 200
        assert response.json()["data"]["score"] == 1e27


class TestClusterLeaderEndpoint:
    """Tests for POST /v1/scores/cluster-leader."""

    @pytest.mark.asyncio
    async def test_first_max_wins(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/scores/cluster-leader",
            json={
                "results": [
                    {"unit_id": "A", "actual_value": 5},
                    {"unit_id": "B", "actual_value": 8},
                    {"unit_id": "C", "actual_value": 8},
                ]
            },
        )
        assert response.json()["data"] == {"unit_id": "B", "actual_value": 8}

    @pytest.mark.asyncio
    async def test_empty_is_null(self, client: AsyncClient) -> None:
        response = await client.post("/v1/scores/cluster-leader", json={"results": []})

        assert response.status_code == 200
        assert response.json()["data"] is None


class TestTreeEndpoint:
    """Tests for POST /v1/scores/tree."""

    @pytest.mark.asyncio
    async def test_tree_with_violation(self, client: AsyncClient) -> None:
        payload = {
            "criteria": [
                {"id": "P", "name": "Group", "criteria_type": 0, "max_score": 5},
                {"id": "A", "name": "A", "criteria_type": 2, "max_score": 3, "parent_id": "P"},
                {"id": "B", "name": "B", "criteria_type": 2, "max_score": 3, "parent_id": "P"},
            ],
            "leaf_scores": {"A": 3, "B": 3},
        }
        response = await client.post("/v1/scores/tree", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["data"]["total"] == 6
        assert body["data"]["scores"]["P"] == 6
        assert body["data"]["violations"][0]["overrun"] == 1
        assert [row["code"] for row in body["data"]["rows"]] == ["1", "1.1", "1.2"]
        assert body["meta"] == {"violation_count": 1}

    @pytest.mark.asyncio
    async def test_cycle_rejected(self, client: AsyncClient) -> None:
        payload = {
            "criteria": [
                {"id": "A", "criteria_type": 0, "max_score": 1, "parent_id": "B"},
                {"id": "B", "criteria_type": 0, "max_score": 1, "parent_id": "A"},
            ],
        }
        response = await client.post("/v1/scores/tree", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "invalid_criteria_tree"
