import asyncpg

from core import db

from tests.support import ApiTestCase, FailingPool


COLLECTIONS = ("/offenders", "/prosecutors", "/victims", "/crime_scenes", "/cases", "/verdicts", "/judges")


class CollectionKeyTests(ApiTestCase):
    def test_unknown_key_is_422_everywhere(self):
        for path in COLLECTIONS:
            with self.subTest(path=path):
                response = self.client.get(path, params={"bogus": "1"})
                self.assertEqual(response.status_code, 422)
                self.assertEqual(response.json()["error"], "unknown_filter")

    def test_empty_value_is_422_everywhere(self):
        for path in COLLECTIONS:
            with self.subTest(path=path):
                response = self.client.get(f"{path}?id=")
                self.assertEqual(response.status_code, 422)
                self.assertEqual(response.json()["error"], "empty_filter_value")


class CrimeSceneTests(ApiTestCase):
    def test_city_prefix(self):
        response = self.client.get("/crime_scenes", params={"city": "Mont", "sort": "street"})
        self.assertEqual(response.status_code, 200)
        streets = [row["street"] for row in response.json()["crime_scenes"]]
        self.assertEqual(streets, ["Rue Saint-Denis", "Rue Sherbrooke"])

    def test_date_range(self):
        response = self.client.get("/crime_scenes", params={"date-max": "2020-12-31"})
        ids = [row["crime_scene_id"] for row in response.json()["crime_scenes"]]
        self.assertEqual(ids, [1, 3])

    def test_by_id(self):
        self.assertEqual(self.client.get("/crime_scenes/2").json()["city"], "Toronto")
        self.assertEqual(self.client.get("/crime_scenes/9").status_code, 404)


class CaseTests(ApiTestCase):
    def test_list_by_severity(self):
        response = self.client.get("/cases", params={"severity": "felony"})
        self.assertEqual([row["case_id"] for row in response.json()["cases"]], [1, 2])

    def test_case_with_crime_scene(self):
        body = self.client.get("/cases/3").json()
        self.assertEqual(body["case"]["description"], "Shoplifting")
        self.assertEqual(body["crime_scene"]["street"], "Rue Saint-Denis")

    def test_case_by_id_rejects_query(self):
        self.assertEqual(self.client.get("/cases/1?page=1").status_code, 422)


class VerdictTests(ApiTestCase):
    def test_list_by_case(self):
        response = self.client.get("/verdicts", params={"case-id": "2"})
        self.assertEqual(response.json()["verdicts"][0]["name"], "Not guilty")

    def test_by_id(self):
        self.assertEqual(self.client.get("/verdicts/1").json()["sentence_years"], 8)
        self.assertEqual(self.client.get("/verdicts/3").status_code, 404)


class JudgeTests(ApiTestCase):
    def test_list_and_get(self):
        response = self.client.get("/judges", params={"court": "Superior"})
        self.assertEqual([row["last_name"] for row in response.json()["judges"]], ["Moreau"])
        self.assertEqual(self.client.get("/judges/2").json()["court"], "Court of Appeal")

    def test_page_size_bounds(self):
        self.assertEqual(self.client.get("/judges", params={"pageSize": "4"}).status_code, 422)
        self.assertEqual(self.client.get("/judges", params={"pageSize": "abc"}).status_code, 400)


class StorageFailureTests(ApiTestCase):
    def test_rejected_statement_is_400(self):
        db._pool = FailingPool(asyncpg.PostgresError("relation does not exist"))
        response = self.client.get("/judges")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "storage_rejected")

    def test_lost_connection_is_503(self):
        db._pool = FailingPool(ConnectionResetError("connection reset"))
        response = self.client.get("/judges/1")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["error"], "storage_unavailable")


class RootTests(ApiTestCase):
    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_about_lists_resources(self):
        body = self.client.get("/").json()
        self.assertIn("GET /offenders/{offender_id}/case", body["resources"]["offenders"])
        self.assertEqual(sorted(body["resources"]), sorted(
            ["offenders", "prosecutors", "victims", "crime_scenes", "cases", "verdicts", "judges"]
        ))
