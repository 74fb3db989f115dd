# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from typing import Any, Dict

from apitest import ApiTestCase


class TestEvents(ApiTestCase):
    def test_create_and_fetch_round_trip(self) -> None:
        _, headers = self.new_user()
        created = self.create_event(headers, name="Ironman", event_type="TRIATHLON", expected_duration=36000)

        resp = self.client.get(f"/api/events/{created['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["is_owner"])
        for field in ("name", "event_type", "expected_duration", "private"):
            self.assertEqual(body["event"][field], created[field])
        self.assertEqual(body["event"]["name"], "Ironman")
        self.assertEqual(body["event"]["expected_duration"], 36000)
        self.assertFalse(body["event"]["private"])

        listed = self.client.get("/api/events", headers=headers).json()
        self.assertEqual(listed["count"], 1)
        self.assertEqual(listed["events"][0]["id"], created["id"])

    def test_create_validation(self) -> None:
        _, headers = self.new_user()
        resp = self.client.post("/api/events", json={"name": "x", "event_type": "RUN"}, headers=headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Missing required field: expected_duration")

        resp = self.client.post(
            "/api/events", json={"name": "x", "event_type": "RUN", "expected_duration": 0}, headers=headers
        )
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(resp.json()["error"].startswith("Invalid field: expected_duration"))

        resp = self.client.post(
            "/api/events", json={"name": "x", "event_type": "SWIM", "expected_duration": 60}, headers=headers
        )
        self.assertEqual(resp.status_code, 400)

    def test_private_events_hidden_from_others(self) -> None:
        _, owner = self.new_user("Owner")
        _, stranger = self.new_user("Stranger")
        private = self.create_event(owner, private=True)
        public = self.create_event(owner, name="Open")

        self.assertEqual(self.client.get(f"/api/events/{private['id']}", headers=stranger).status_code, 404)
        resp = self.client.get(f"/api/events/{public['id']}", headers=stranger)
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["is_owner"])

    def test_partial_update(self) -> None:
        _, headers = self.new_user()
        event = self.create_event(headers)

        resp = self.client.put(f"/api/events/{event['id']}", json={"name": "Half"}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        updated = resp.json()["event"]
        self.assertEqual(updated["name"], "Half")
        self.assertEqual(updated["expected_duration"], 3600)

        resp = self.client.put(f"/api/events/{event['id']}", json={}, headers=headers)
        self.assertEqual(resp.status_code, 400)

    def test_only_owner_can_modify(self) -> None:
        _, owner = self.new_user("Owner")
        _, other = self.new_user("Other")
        event = self.create_event(owner)

        self.assertEqual(
            self.client.put(f"/api/events/{event['id']}", json={"name": "Mine"}, headers=other).status_code, 403
        )
        self.assertEqual(self.client.delete(f"/api/events/{event['id']}", headers=other).status_code, 403)
        self.assertEqual(self.client.get("/api/events/does-not-exist", headers=owner).status_code, 404)

    def test_duration_cannot_shrink_below_instances(self) -> None:
        _, headers = self.new_user()
        event = self.create_event(headers, expected_duration=7200)
        item = self.create_food_item(headers)
        self.add_instance(headers, event["id"], item["id"], 5400)

        resp = self.client.put(f"/api/events/{event['id']}", json={"expected_duration": 3600}, headers=headers)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.put(f"/api/events/{event['id']}", json={"expected_duration": 5400}, headers=headers)
        self.assertEqual(resp.status_code, 200)

    def test_duplicate_copies_instances_and_goals(self) -> None:
        _, headers = self.new_user()
        nutrients = self.nutrient_ids(headers)
        event = self.create_event(headers, name="Century")
        item = self.create_food_item(headers)
        self.add_instance(headers, event["id"], item["id"], 600)
        self.add_instance(headers, event["id"], item["id"], 1800, servings=2)
        resp = self.client.put(
            "/api/event-goals/base",
            json={"event_id": event["id"], "goals": [{"nutrient_id": nutrients["Carbohydrates"], "quantity": 60, "unit": "g"}]},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)

        resp = self.client.post(f"/api/events/{event['id']}/duplicate", headers=headers)
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["food_instances_copied"], 2)
        self.assertEqual(body["event"]["name"], "Century - copy")
        self.assertNotEqual(body["event"]["id"], event["id"])

        copy_id = body["event"]["id"]
        instances = self.client.get(f"/api/food-instances/event/{copy_id}", headers=headers).json()
        self.assertEqual(instances["count"], 2)
        goals = self.client.get(f"/api/event-goals/base?event_id={copy_id}", headers=headers).json()
        self.assertEqual(goals["count"], 1)

    def test_delete_cascades(self) -> None:
        _, headers = self.new_user()
        nutrients = self.nutrient_ids(headers)
        event = self.create_event(headers)
        item = self.create_food_item(headers)
        instance = self.add_instance(headers, event["id"], item["id"], 100)
        self.client.put(
            "/api/event-goals/hourly",
            json={
                "event_id": event["id"],
                "goals": [{"nutrient_id": nutrients["Sodium"], "quantity": 500, "unit": "mg", "hour": 0}],
            },
            headers=headers,
        )

        resp = self.client.delete(f"/api/events/{event['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get(f"/api/events/{event['id']}", headers=headers).status_code, 404)
        resp = self.client.delete(f"/api/food-instances/{instance['id']}", headers=headers)
        self.assertEqual(resp.status_code, 404)

        from racefuel.db import session_scope
        from racefuel.db_models import EventGoalHourly, FoodInstance

        with session_scope() as db:
            self.assertEqual(db.query(FoodInstance).filter_by(event_id=event["id"]).count(), 0)
            self.assertEqual(db.query(EventGoalHourly).filter_by(event_id=event["id"]).count(), 0)

        # The food item itself survives and is deletable now that nothing uses it.
        self.assertEqual(self.client.delete(f"/api/food-items/{item['id']}", headers=headers).status_code, 200)

    def test_triathlon_attributes(self) -> None:
        _, headers = self.new_user()
        event = self.create_event(headers, name="Olympic", event_type="TRIATHLON", expected_duration=9000)
        segments = {
            "event_id": event["id"],
            "swim_duration_seconds": 1800,
            "bike_duration_seconds": 4200,
            "run_duration_seconds": 2700,
            "t1_duration_seconds": 150,
            "t2_duration_seconds": 150,
        }

        resp = self.client.post("/api/triathlon-attributes", json=dict(segments, run_duration_seconds=2000), headers=headers)
        self.assertEqual(resp.status_code, 400)
        self.assertIn("8300s", resp.json()["error"])

        resp = self.client.post("/api/triathlon-attributes", json=segments, headers=headers)
        self.assertEqual(resp.status_code, 201)
        resp = self.client.post("/api/triathlon-attributes", json=dict(segments, swim_duration_seconds=1700, t1_duration_seconds=250), headers=headers)
        self.assertEqual(resp.status_code, 200)

        resp = self.client.get(f"/api/triathlon-attributes/{event['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["attributes"]["swim_duration_seconds"], 1700)

        listed = self.client.get("/api/events", headers=headers).json()["events"]
        self.assertEqual(listed[0]["triathlon_attributes"]["t1_duration_seconds"], 250)

        run = self.create_event(headers)
        resp = self.client.post("/api/triathlon-attributes", json=dict(segments, event_id=run["id"]), headers=headers)
        self.assertEqual(resp.status_code, 400)

    def test_community_shows_public_events_of_connections(self) -> None:
        me, my_headers = self.new_user("Me")
        friend, friend_headers = self.new_user("Friend")
        public = self.create_event(friend_headers, name="Shared ride")
        self.create_event(friend_headers, name="Hidden ride", private=True)

        self.assertEqual(self.client.get("/api/events/community", headers=my_headers).json()["count"], 0)

        conn = self.client.post(
            "/api/user-connections", json={"receiving_user": friend["id"]}, headers=my_headers
        ).json()["connection"]
        self.client.put(f"/api/user-connections/{conn['id']}", json={"status": "ACCEPTED"}, headers=friend_headers)

        resp = self.client.get("/api/events/community", headers=my_headers)
        self.assertEqual(resp.status_code, 200)
        events = resp.json()["events"]
        self.assertEqual([e["id"] for e in events], [public["id"]])
        self.assertEqual(events[0]["owner"]["first_name"], "Friend")

    def test_nutrition_summary(self) -> None:
        _, headers = self.new_user()
        nutrients = self.nutrient_ids(headers)
        carbs = nutrients["Carbohydrates"]
        event = self.create_event(headers, expected_duration=5400)
        item = self.create_food_item(headers, nutrients=[{"nutrient_id": carbs, "quantity": 25, "unit": "g"}])
        self.add_instance(headers, event["id"], item["id"], 0)
        self.add_instance(headers, event["id"], item["id"], 2000, servings=2)
        self.add_instance(headers, event["id"], item["id"], 5400)
        self.client.put(
            "/api/event-goals/base",
            json={"event_id": event["id"], "goals": [{"nutrient_id": carbs, "quantity": 60, "unit": "g"}]},
            headers=headers,
        )
        self.client.put(
            "/api/event-goals/hourly",
            json={"event_id": event["id"], "goals": [{"nutrient_id": carbs, "quantity": 90, "unit": "g", "hour": 1}]},
            headers=headers,
        )

        resp = self.client.get(f"/api/events/{event['id']}/nutrition-summary", headers=headers)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["window_seconds"], 1800)
        self.assertEqual(len(body["windows"]), 3)
        self.assertEqual([w["food_instance_count"] for w in body["windows"]], [1, 1, 1])
        self.assertEqual(body["windows"][1]["totals"][0]["quantity"], 50)
        self.assertEqual(body["totals"][0]["quantity"], 100)
        # 60 g for hour 0, then the 90 g override for the half hour that remains.
        self.assertAlmostEqual(body["goals"][0]["quantity"], 105)

        resp = self.client.get(f"/api/events/{event['id']}/nutrition-summary?window_seconds=3600", headers=headers)
        self.assertEqual(len(resp.json()["windows"]), 2)

    def _triathlon_with_segments(self, headers: Dict[str, str]) -> Dict[str, Any]:
        event = self.create_event(headers, name="Sprint", event_type="TRIATHLON", expected_duration=4500)
        resp = self.client.post(
            "/api/triathlon-attributes",
            json={
                "event_id": event["id"],
                "swim_duration_seconds": 900,
                "bike_duration_seconds": 2100,
                "run_duration_seconds": 1500,
            },
            headers=headers,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return event

    def test_delete_triathlon_attributes(self) -> None:
        _, headers = self.new_user()
        _, other = self.new_user("Other")
        event = self._triathlon_with_segments(headers)
        before = self.client.get(f"/api/events/{event['id']}", headers=headers).json()["event"]["updated_at"]

        resp = self.client.delete(f"/api/triathlon-attributes/{event['id']}", headers=other)
        self.assertEqual(resp.status_code, 403)

        resp = self.client.delete(f"/api/triathlon-attributes/{event['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["event_id"], event["id"])
        self.assertEqual(self.client.get(f"/api/triathlon-attributes/{event['id']}", headers=headers).status_code, 404)

        after = self.client.get(f"/api/events/{event['id']}", headers=headers).json()["event"]
        self.assertEqual(after["event_type"], "TRIATHLON")
        self.assertIsNone(after["triathlon_attributes"])
        self.assertGreaterEqual(after["updated_at"], before)

        resp = self.client.delete(f"/api/triathlon-attributes/{event['id']}", headers=headers)
        self.assertEqual(resp.status_code, 404)

    def test_leaving_triathlon_drops_segments(self) -> None:
        _, headers = self.new_user()
        event = self._triathlon_with_segments(headers)

        resp = self.client.put(f"/api/events/{event['id']}", json={"event_type": "RUN"}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()["event"]["triathlon_attributes"])
        self.assertEqual(self.client.get(f"/api/triathlon-attributes/{event['id']}", headers=headers).status_code, 404)

    def test_shrinking_duration_prunes_hourly_goals(self) -> None:
        _, headers = self.new_user()
        sodium = self.nutrient_ids(headers)["Sodium"]
        event = self.create_event(headers, expected_duration=7200)
        resp = self.client.put(
            "/api/event-goals/hourly",
            json={
                "event_id": event["id"],
                "goals": [
                    {"nutrient_id": sodium, "quantity": 400, "unit": "mg", "hour": 0},
                    {"nutrient_id": sodium, "quantity": 600, "unit": "mg", "hour": 1},
                ],
            },
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.client.put(f"/api/events/{event['id']}", json={"expected_duration": 1800}, headers=headers)
        self.assertEqual(resp.status_code, 200)

        hourly = self.client.get(f"/api/event-goals/hourly?event_id={event['id']}", headers=headers).json()
        self.assertEqual([g["hour"] for g in hourly["goals"]], [0])

        copy_id = self.client.post(f"/api/events/{event['id']}/duplicate", headers=headers).json()["event"]["id"]
        hourly = self.client.get(f"/api/event-goals/hourly?event_id={copy_id}", headers=headers).json()
        self.assertEqual([g["hour"] for g in hourly["goals"]], [0])

    def test_duplicate_of_longest_name_fits_column(self) -> None:
        _, headers = self.new_user()
        event = self.create_event(headers, name="N" * 255)

        resp = self.client.post(f"/api/events/{event['id']}/duplicate", headers=headers)
        self.assertEqual(resp.status_code, 201)
        name = resp.json()["event"]["name"]
        self.assertEqual(len(name), 255)
        self.assertTrue(name.endswith(" - copy"))
        self.assertEqual(name, "N" * 248 + " - copy")

        short = self.create_event(headers, name="Relay")
        resp = self.client.post(f"/api/events/{short['id']}/duplicate", headers=headers)
        self.assertEqual(resp.json()["event"]["name"], "Relay - copy")


if __name__ == "__main__":
    unittest.main()
