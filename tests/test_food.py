# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from sqlalchemy.exc import IntegrityError

from apitest import ApiTestCase


class TestFoodItems(ApiTestCase):
    def test_nutrients_are_seeded(self) -> None:
        _, headers = self.new_user()
        resp = self.client.get("/api/nutrients", headers=headers)
        self.assertEqual(resp.status_code, 200)
        names = [n["nutrient_name"] for n in resp.json()["nutrients"]]
        self.assertIn("Carbohydrates", names)
        self.assertEqual(resp.json()["count"], len(names))

    def test_create_with_nutrients(self) -> None:
        _, headers = self.new_user()
        nutrients = self.nutrient_ids(headers)
        item = self.create_food_item(
            headers,
            nutrients=[
                {"nutrient_id": nutrients["Carbohydrates"], "quantity": 22, "unit": "g"},
                {"nutrient_id": nutrients["Sodium"], "quantity": 60, "unit": "mg"},
            ],
        )
        self.assertEqual(item["cost"], 2.5)
        self.assertEqual(len(item["nutrients"]), 2)

        resp = self.client.get(f"/api/food-items/{item['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        by_name = {n["nutrient"]["nutrient_name"]: n for n in resp.json()["food_item"]["nutrients"]}
        self.assertEqual(by_name["Sodium"]["quantity"], 60)
        self.assertEqual(by_name["Sodium"]["unit"], "mg")

    def test_duplicate_or_unknown_nutrient_rejected(self) -> None:
        _, headers = self.new_user()
        carbs = self.nutrient_ids(headers)["Carbohydrates"]
        resp = self.client.post(
            "/api/food-items",
            json={
                "item_name": "Bar",
                "nutrients": [
                    {"nutrient_id": carbs, "quantity": 40, "unit": "g"},
                    {"nutrient_id": carbs, "quantity": 41, "unit": "g"},
                ],
            },
            headers=headers,
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/food-items",
            json={"item_name": "Bar", "nutrients": [{"nutrient_id": "nope", "quantity": 1, "unit": "g"}]},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("nope", resp.json()["error"])

    def test_food_item_nutrient_pair_is_unique_in_db(self) -> None:
        user, headers = self.new_user()
        carbs = self.nutrient_ids(headers)["Carbohydrates"]
        item = self.create_food_item(headers, nutrients=[{"nutrient_id": carbs, "quantity": 20, "unit": "g"}])

        from racefuel.db import session_scope
        from racefuel.db_models import FoodItemNutrient

        with self.assertRaises(IntegrityError):
            with session_scope() as db:
                db.add(FoodItemNutrient(food_item_id=item["id"], nutrient_id=carbs, quantity=5, unit="g"))

    def test_update_syncs_nutrients(self) -> None:
        _, headers = self.new_user()
        nutrients = self.nutrient_ids(headers)
        item = self.create_food_item(
            headers,
            nutrients=[
                {"nutrient_id": nutrients["Carbohydrates"], "quantity": 20, "unit": "g"},
                {"nutrient_id": nutrients["Caffeine"], "quantity": 40, "unit": "mg"},
            ],
        )
        carb_row_id = next(n["id"] for n in item["nutrients"] if n["nutrient_id"] == nutrients["Carbohydrates"])

        resp = self.client.put(
            f"/api/food-items/{item['id']}",
            json={
                "item_name": "Gel Plus",
                "nutrients": [
                    {"nutrient_id": nutrients["Carbohydrates"], "quantity": 25, "unit": "g"},
                    {"nutrient_id": nutrients["Sodium"], "quantity": 100, "unit": "mg"},
                ],
            },
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        updated = resp.json()["food_item"]
        self.assertEqual(updated["item_name"], "Gel Plus")
        rows = {n["nutrient_id"]: n for n in updated["nutrients"]}
        self.assertEqual(set(rows), {nutrients["Carbohydrates"], nutrients["Sodium"]})
        self.assertEqual(rows[nutrients["Carbohydrates"]]["id"], carb_row_id)
        self.assertEqual(rows[nutrients["Carbohydrates"]]["quantity"], 25)

    def test_only_creator_can_modify(self) -> None:
        _, owner = self.new_user("Owner")
        _, other = self.new_user("Other")
        item = self.create_food_item(owner)
        resp = self.client.put(f"/api/food-items/{item['id']}", json={"item_name": "Mine"}, headers=other)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.client.delete(f"/api/food-items/{item['id']}", headers=other).status_code, 403)

    def test_my_items_only(self) -> None:
        _, owner = self.new_user("Owner")
        _, other = self.new_user("Other")
        mine = self.create_food_item(owner, item_name="Mine")
        self.create_food_item(other, item_name="Theirs")

        resp = self.client.get("/api/food-items?my_items_only=true", headers=owner)
        self.assertEqual([i["id"] for i in resp.json()["food_items"]], [mine["id"]])
        resp = self.client.get("/api/food-items", headers=owner)
        self.assertGreaterEqual(resp.json()["count"], 2)

    def test_item_in_use_cannot_be_deleted(self) -> None:
        _, headers = self.new_user()
        event = self.create_event(headers)
        item = self.create_food_item(headers)
        self.add_instance(headers, event["id"], item["id"], 60)

        resp = self.client.delete(f"/api/food-items/{item['id']}", headers=headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get(f"/api/food-items/{item['id']}", headers=headers).status_code, 200)


class TestFoodInstances(ApiTestCase):
    def test_time_must_lie_within_event(self) -> None:
        _, headers = self.new_user()
        event = self.create_event(headers, expected_duration=3600)
        item = self.create_food_item(headers)

        resp = self.client.post(
            "/api/food-instances",
            json={"event_id": event["id"], "food_item_id": item["id"], "time_elapsed_at_consumption": 4000},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["error"],
            "time_elapsed_at_consumption (4000s) cannot exceed event duration (3600s)",
        )

        resp = self.client.post(
            "/api/food-instances",
            json={"event_id": event["id"], "food_item_id": item["id"], "time_elapsed_at_consumption": -1},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 400)

        instance = self.add_instance(headers, event["id"], item["id"], 3600)
        self.assertEqual(instance["servings"], 1)

        resp = self.client.put(
            f"/api/food-instances/{instance['id']}", json={"time_elapsed_at_consumption": 3601}, headers=headers
        )
        self.assertEqual(resp.status_code, 400)

    def test_servings_must_be_positive(self) -> None:
        _, headers = self.new_user()
        event = self.create_event(headers)
        item = self.create_food_item(headers)
        resp = self.client.post(
            "/api/food-instances",
            json={"event_id": event["id"], "food_item_id": item["id"], "time_elapsed_at_consumption": 10, "servings": 0},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(resp.json()["error"].startswith("Invalid field: servings"))

    def test_nutrient_totals_scale_with_servings(self) -> None:
        _, headers = self.new_user()
        carbs = self.nutrient_ids(headers)["Carbohydrates"]
        event = self.create_event(headers, expected_duration=36000)
        item = self.create_food_item(headers, nutrients=[{"nutrient_id": carbs, "quantity": 23, "unit": "g"}])
        self.add_instance(headers, event["id"], item["id"], 1800, servings=2)

        resp = self.client.get(f"/api/food-instances/event/{event['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["count"], 1)
        instance = body["food_instances"][0]
        self.assertEqual(instance["food_item"]["id"], item["id"])
        self.assertEqual(instance["nutrient_totals"][0]["quantity"], 46)
        self.assertEqual(body["totals"][0]["nutrient_id"], carbs)
        self.assertEqual(body["totals"][0]["quantity"], 46)
        self.assertEqual(body["totals"][0]["unit"], "g")

    def test_update_and_delete(self) -> None:
        _, headers = self.new_user()
        _, other = self.new_user("Other")
        event = self.create_event(headers)
        item = self.create_food_item(headers)
        instance = self.add_instance(headers, event["id"], item["id"], 100)

        resp = self.client.put(f"/api/food-instances/{instance['id']}", json={"servings": 1.5}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["food_instance"]["servings"], 1.5)
        self.assertEqual(resp.json()["food_instance"]["time_elapsed_at_consumption"], 100)

        self.assertEqual(self.client.put(f"/api/food-instances/{instance['id']}", json={}, headers=headers).status_code, 400)
        self.assertEqual(self.client.delete(f"/api/food-instances/{instance['id']}", headers=other).status_code, 403)

        resp = self.client.delete(f"/api/food-instances/{instance['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["deleted_instance_id"], instance["id"])

    def test_other_users_cannot_add_to_event(self) -> None:
        _, owner = self.new_user("Owner")
        _, other = self.new_user("Other")
        event = self.create_event(owner)
        item = self.create_food_item(other)
        resp = self.client.post(
            "/api/food-instances",
            json={"event_id": event["id"], "food_item_id": item["id"], "time_elapsed_at_consumption": 10},
            headers=other,
        )
        self.assertEqual(resp.status_code, 403)


class TestFavorites(ApiTestCase):
    def test_favorites(self) -> None:
        _, headers = self.new_user()
        item = self.create_food_item(headers)

        resp = self.client.post("/api/favorite-food-items", json={"food_item_id": item["id"]}, headers=headers)
        self.assertEqual(resp.status_code, 201)
        resp = self.client.post("/api/favorite-food-items", json={"food_item_id": item["id"]}, headers=headers)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/favorite-food-items", json={"food_item_id": "missing"}, headers=headers)
        self.assertEqual(resp.status_code, 404)

        listed = self.client.get("/api/favorite-food-items", headers=headers).json()
        self.assertEqual(listed["count"], 1)
        self.assertEqual(listed["favorites"][0]["food_item"]["item_name"], "Gel")

        self.assertEqual(self.client.delete(f"/api/favorite-food-items/{item['id']}", headers=headers).status_code, 200)
        self.assertEqual(self.client.delete(f"/api/favorite-food-items/{item['id']}", headers=headers).status_code, 404)


if __name__ == "__main__":
    unittest.main()
