# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from apitest import ApiTestCase


class TestEventGoals(ApiTestCase):
    def test_base_goals_upsert_keeps_identity(self) -> None:
        _, headers = self.new_user()
        nutrients = self.nutrient_ids(headers)
        carbs, sodium = nutrients["Carbohydrates"], nutrients["Sodium"]
        event = self.create_event(headers)

        resp = self.client.put(
            "/api/event-goals/base",
            json={"event_id": event["id"], "goals": [{"nutrient_id": carbs, "quantity": 60, "unit": "g"}]},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        first = resp.json()["goals"][0]

        resp = self.client.put(
            "/api/event-goals/base",
            json={
                "event_id": event["id"],
                "goals": [
                    {"nutrient_id": carbs, "quantity": 90, "unit": "g"},
                    {"nutrient_id": sodium, "quantity": 500, "unit": "mg"},
                ],
            },
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)
        goals = {g["nutrient_id"]: g for g in resp.json()["goals"]}
        self.assertEqual(goals[carbs]["id"], first["id"])
        self.assertEqual(goals[carbs]["quantity"], 90)
        sodium_id = goals[sodium]["id"]

        # POST is accepted as an alias; omitted keys are removed.
        resp = self.client.post(
            "/api/event-goals/base",
            json={"event_id": event["id"], "goals": [{"nutrient_id": sodium, "quantity": 600, "unit": "mg"}]},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)
        listed = self.client.get(f"/api/event-goals/base?event_id={event['id']}", headers=headers).json()
        self.assertEqual(listed["count"], 1)
        self.assertEqual(listed["goals"][0]["id"], sodium_id)
        self.assertEqual(listed["goals"][0]["nutrient"]["nutrient_name"], "Sodium")

    def test_duplicate_keys_rejected(self) -> None:
        _, headers = self.new_user()
        carbs = self.nutrient_ids(headers)["Carbohydrates"]
        event = self.create_event(headers, expected_duration=7200)

        resp = self.client.put(
            "/api/event-goals/base",
            json={
                "event_id": event["id"],
                "goals": [
                    {"nutrient_id": carbs, "quantity": 60, "unit": "g"},
                    {"nutrient_id": carbs, "quantity": 70, "unit": "g"},
                ],
            },
            headers=headers,
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.put(
            "/api/event-goals/hourly",
            json={
                "event_id": event["id"],
                "goals": [
                    {"nutrient_id": carbs, "quantity": 60, "unit": "g", "hour": 1},
                    {"nutrient_id": carbs, "quantity": 70, "unit": "g", "hour": 1},
                ],
            },
            headers=headers,
        )
        self.assertEqual(resp.status_code, 400)

    def test_hourly_goals(self) -> None:
        _, headers = self.new_user()
        carbs = self.nutrient_ids(headers)["Carbohydrates"]
        event = self.create_event(headers, expected_duration=5400)

        resp = self.client.put(
            "/api/event-goals/hourly",
            json={"event_id": event["id"], "goals": [{"nutrient_id": carbs, "quantity": 60, "unit": "g", "hour": 2}]},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.put(
            "/api/event-goals/hourly",
            json={
                "event_id": event["id"],
                "goals": [
                    {"nutrient_id": carbs, "quantity": 80, "unit": "g", "hour": 1},
                    {"nutrient_id": carbs, "quantity": 60, "unit": "g", "hour": 0},
                ],
            },
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([g["hour"] for g in resp.json()["goals"]], [0, 1])

        goal_id = resp.json()["goals"][0]["id"]
        self.assertEqual(self.client.delete(f"/api/event-goals/hourly/{goal_id}", headers=headers).status_code, 200)
        self.assertEqual(self.client.delete(f"/api/event-goals/hourly/{goal_id}", headers=headers).status_code, 404)

    def test_only_event_owner_sets_goals(self) -> None:
        _, owner = self.new_user("Owner")
        _, other = self.new_user("Other")
        carbs = self.nutrient_ids(owner)["Carbohydrates"]
        event = self.create_event(owner)
        resp = self.client.put(
            "/api/event-goals/base",
            json={"event_id": event["id"], "goals": [{"nutrient_id": carbs, "quantity": 60, "unit": "g"}]},
            headers=other,
        )
        self.assertEqual(resp.status_code, 403)

        resp = self.client.put(
            "/api/event-goals/base",
            json={"event_id": event["id"], "goals": [{"nutrient_id": carbs, "quantity": 60, "unit": "g"}]},
            headers=owner,
        )
        goal_id = resp.json()["goals"][0]["id"]
        self.assertEqual(self.client.delete(f"/api/event-goals/base/{goal_id}", headers=other).status_code, 403)


if __name__ == "__main__":
    unittest.main()
