from tests.support import ApiTestCase


class VictimTests(ApiTestCase):
    def test_list_by_prosecutor(self):
        response = self.client.get("/victims", params={"prosecutor-id": "2"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([row["victim_id"] for row in response.json()["victims"]], [2])

    def test_non_numeric_prosecutor_id_is_400(self):
        self.assertEqual(self.client.get("/victims", params={"prosecutor-id": "x"}).status_code, 400)

    def test_unknown_filter_is_422(self):
        self.assertEqual(self.client.get("/victims", params={"victim_id": "1"}).status_code, 422)

    def test_get_with_prosecutor(self):
        response = self.client.get("/victims/1")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["victim"]["last_name"], "Martin")
        self.assertEqual(body["prosecutor"]["last_name"], "Petrov")

    def test_get_without_prosecutor(self):
        body = self.client.get("/victims/3").json()
        self.assertEqual(body["victim"]["first_name"], "Tom")
        self.assertIsNone(body["prosecutor"])

    def test_get_missing_and_malformed(self):
        self.assertEqual(self.client.get("/victims/42").status_code, 404)
        self.assertEqual(self.client.get("/victims/abc").status_code, 400)
        self.assertEqual(self.client.get("/victims/1?age=3").status_code, 422)
