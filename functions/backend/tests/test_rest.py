import unittest
from unittest.mock import MagicMock

import requests

from backend.entities import ENTITY_TABLES, get_entity
from backend.errors import (
    BackendConnectionError,
    BackendRequestError,
    is_auth_error,
    is_missing_relation,
)
from backend.management import ManagementClient, dashboard_sql_url
from backend.rest import RestClient, build_filters, parse_order


def make_response(status_code=200, json_body=None, headers=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = "Error" if status_code >= 400 else "OK"
    response.headers = headers or {}
    response.text = text
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    return response


class FilterTests(unittest.TestCase):
    def test_build_filters(self):
        params = build_filters(
            {"status": "draft", "is_active": True, "id": ["a", "b"], "skip": None}
        )
        self.assertEqual(
            params,
            {"status": "eq.draft", "is_active": "eq.true", "id": "in.(a,b)"},
        )

    def test_parse_order(self):
        self.assertEqual(parse_order("-created_date"), ("created_date", False))
        self.assertEqual(parse_order("priority"), ("priority", True))


class RestClientTests(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.session.headers = {}
        self.client = RestClient("https://abc.supabase.co/", "anon-key", session=self.session)

    def test_sets_auth_headers(self):
        self.assertEqual(self.session.headers["apikey"], "anon-key")
        self.assertEqual(self.session.headers["Authorization"], "Bearer anon-key")

    def test_find_builds_postgrest_query(self):
        self.session.request.return_value = make_response(json_body=[{"id": "1"}])

        rows = self.client.table("keywords").find({"status": "queued"}, limit=10)

        self.assertEqual(rows, [{"id": "1"}])
        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ("GET", "https://abc.supabase.co/rest/v1/keywords"))
        self.assertEqual(
            kwargs["params"],
            {
                "select": "*",
                "status": "eq.queued",
                "order": "created_date.desc",
                "limit": "10",
            },
        )

    def test_list_ascending_order(self):
        self.session.request.return_value = make_response(json_body=[])
        self.client.table("tasks").list("due_date")
        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs["params"]["order"], "due_date.asc")

    def test_find_one_missing(self):
        self.session.request.return_value = make_response(json_body=[])
        self.assertIsNone(self.client.table("clients").find_one("nope"))

    def test_create_returns_row(self):
        self.session.request.return_value = make_response(
            201, json_body=[{"id": "new", "keyword": "seo"}]
        )

        row = self.client.table("keywords").create({"keyword": "seo"})

        self.assertEqual(row["id"], "new")
        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs["headers"], {"Prefer": "return=representation"})
        self.assertEqual(kwargs["json"], {"keyword": "seo"})

    def test_create_many_posts_array(self):
        rows = [{"keyword": "a"}, {"keyword": "b"}]
        self.session.request.return_value = make_response(201, json_body=rows)

        self.assertEqual(self.client.table("keywords").create_many(rows), rows)
        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs["json"], rows)

    def test_list_users(self):
        self.session.request.return_value = make_response(
            json_body={"users": [{"id": "u1", "email": "a@example.com"}]}
        )
        self.assertEqual(self.client.list_users()[0]["id"], "u1")
        args, _ = self.session.request.call_args
        self.assertEqual(args[1], "https://abc.supabase.co/auth/v1/admin/users")

    def test_update_where_requires_filter(self):
        with self.assertRaises(ValueError):
            self.client.table("keywords").update_where({}, {"status": "done"})

    def test_update_filters_by_id(self):
        self.session.request.return_value = make_response(json_body=[{"id": "1"}])
        self.client.table("tasks").update("1", {"status": "done"})
        args, kwargs = self.session.request.call_args
        self.assertEqual(args[0], "PATCH")
        self.assertEqual(kwargs["params"], {"id": "eq.1"})

    def test_count_reads_content_range(self):
        self.session.request.return_value = make_response(
            json_body=None, headers={"Content-Range": "0-24/3573"}
        )
        self.assertEqual(self.client.table("keywords").count(), 3573)
        args, kwargs = self.session.request.call_args
        self.assertEqual(args[0], "HEAD")
        self.assertEqual(kwargs["headers"], {"Prefer": "count=exact"})

    def test_count_empty_table(self):
        self.session.request.return_value = make_response(
            json_body=None, headers={"Content-Range": "*/0"}
        )
        self.assertEqual(self.client.table("keywords").count(), 0)

    def test_request_error_is_parsed(self):
        self.session.request.return_value = make_response(
            404,
            json_body={
                "code": "42P01",
                "message": 'relation "public.keywords" does not exist',
                "details": None,
                "hint": None,
            },
        )

        with self.assertRaises(BackendRequestError) as ctx:
            self.client.table("keywords").exists()

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.code, "42P01")
        self.assertTrue(is_missing_relation(ctx.exception))
        self.assertFalse(is_auth_error(ctx.exception))

    def test_auth_error(self):
        self.session.request.return_value = make_response(
            401, json_body={"message": "Invalid API key"}
        )
        with self.assertRaises(BackendRequestError) as ctx:
            self.client.table("agent_definitions").find()
        self.assertTrue(is_auth_error(ctx.exception))

    def test_connection_error(self):
        self.session.request.side_effect = requests.ConnectionError("dns failure")
        with self.assertRaises(BackendConnectionError):
            self.client.table("keywords").find()

    def test_check_reachable_returns_status(self):
        self.session.get.return_value = make_response(401)
        self.assertEqual(self.client.check_reachable(), 401)

    def test_get_bucket(self):
        self.session.request.return_value = make_response(
            json_body={"id": "uploads", "public": False}
        )
        bucket = self.client.get_bucket("uploads")
        self.assertFalse(bucket["public"])
        args, _ = self.session.request.call_args
        self.assertEqual(args[1], "https://abc.supabase.co/storage/v1/bucket/uploads")


class EntityTests(unittest.TestCase):
    def test_get_entity_uses_table_name(self):
        client = RestClient("https://abc.supabase.co", "key", session=MagicMock())
        handle = get_entity("TimeEntry", client)
        self.assertEqual(handle.table_name, "time_entries")
        self.assertEqual(handle.path, "/rest/v1/time_entries")

    def test_unknown_entity(self):
        with self.assertRaises(KeyError):
            get_entity("Nope", MagicMock())

    def test_entity_catalogue(self):
        self.assertEqual(ENTITY_TABLES["AgentDefinition"], "agent_definitions")
        self.assertEqual(ENTITY_TABLES["EOSRock"], "eos_rocks")
        self.assertNotIn("User", ENTITY_TABLES)


class ManagementClientTests(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.session.headers = {}
        self.client = ManagementClient("token", "abc", session=self.session)

    def test_execute_sql(self):
        self.session.post.return_value = make_response(201, json_body=[{"x": 1}])

        rows = self.client.execute_sql("select 1 as x")

        self.assertEqual(rows, [{"x": 1}])
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "https://api.supabase.com/v1/projects/abc/database/query")
        self.assertEqual(kwargs["json"], {"query": "select 1 as x"})
        self.assertEqual(self.session.headers["Authorization"], "Bearer token")

    def test_execute_sql_unwraps_result(self):
        self.session.post.return_value = make_response(json_body={"result": [{"x": 1}]})
        self.assertEqual(self.client.execute_sql("select 1"), [{"x": 1}])

    def test_execute_sql_error(self):
        self.session.post.return_value = make_response(
            400, json_body={"message": 'relation "keywords" already exists'}
        )
        with self.assertRaises(BackendRequestError) as ctx:
            self.client.execute_sql("create table keywords ()")
        self.assertIn("already exists", str(ctx.exception))

    def test_dashboard_sql_url(self):
        self.assertEqual(
            dashboard_sql_url("abc"), "https://supabase.com/dashboard/project/abc/sql/new"
        )
        self.assertEqual(dashboard_sql_url(None), "https://supabase.com/dashboard")


if __name__ == "__main__":
    unittest.main()
