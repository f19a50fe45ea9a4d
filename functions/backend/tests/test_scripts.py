import io
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError

from backend.config import Settings
from backend.errors import BackendRequestError
from backend.migrations import APPLIED, FAILED, MigrationResult
from scripts import migrate_database
from scripts.check_and_seed import check_agents
from scripts.check_connection import check_database, check_project_status, mask_key
from scripts.check_schema import missing_columns
from scripts.import_keywords import (
    import_keywords,
    parse_int,
    prepare_keywords,
    read_keyword_rows,
)
from scripts.migrate_database import check_migration_status
from scripts.seed_agents import seed_agents
from scripts.verify_migration import EXPECTED_BUCKETS, EXPECTED_TABLES, verify
from shared.agents import AGENT_DEFINITIONS


def missing_table_error(table_name):
    return BackendRequestError(
        f'relation "public.{table_name}" does not exist',
        status_code=404,
        code="42P01",
    )


@patch("sys.stdout", new_callable=io.StringIO)
class SeedAgentsTests(unittest.TestCase):
    def test_creates_missing_and_updates_existing(self, _stdout):
        table = MagicMock()
        table.find.side_effect = [[], [{"id": "a1"}]]

        succeeded, failed = seed_agents(table, AGENT_DEFINITIONS[:2])

        self.assertEqual((succeeded, failed), (2, 0))
        table.create.assert_called_once_with(AGENT_DEFINITIONS[0].as_row())
        table.update_where.assert_called_once_with(
            {"agent_name": AGENT_DEFINITIONS[1].agent_name},
            AGENT_DEFINITIONS[1].as_row(),
        )

    def test_counts_failures_and_continues(self, _stdout):
        table = MagicMock()
        table.find.return_value = []
        table.create.side_effect = [
            BackendRequestError("permission denied", status_code=403),
            {"id": "b"},
        ]

        with self.assertLogs("scripts.seed_agents", level="ERROR"):
            succeeded, failed = seed_agents(table, AGENT_DEFINITIONS[:2])

        self.assertEqual((succeeded, failed), (1, 1))

    def test_catalogue(self, _stdout):
        self.assertEqual(len(AGENT_DEFINITIONS), 9)
        names = [agent.agent_name for agent in AGENT_DEFINITIONS]
        self.assertEqual(len(set(names)), 9)
        row = AGENT_DEFINITIONS[0].as_row()
        self.assertIsInstance(row["capabilities"], list)
        self.assertTrue(row["is_active"])


@patch("sys.stdout", new_callable=io.StringIO)
class CheckAndSeedTests(unittest.TestCase):
    def test_agents_found(self, stdout):
        client = MagicMock()
        client.table.return_value.find.return_value = [
            {"agent_name": "seo_content_writer", "display_name": "SEO Content Writer"}
        ]
        self.assertEqual(check_agents(client), 0)
        client.table.assert_called_once_with("agent_definitions")
        self.assertIn("SEO Content Writer", stdout.getvalue())

    def test_no_agents(self, stdout):
        client = MagicMock()
        client.table.return_value.find.return_value = []
        self.assertEqual(check_agents(client), 1)
        self.assertIn("seed_agents.py", stdout.getvalue())

    def test_query_error_advises_migration(self, stdout):
        client = MagicMock()
        client.table.return_value.find.side_effect = missing_table_error("agent_definitions")
        with self.assertLogs("scripts.check_and_seed", level="ERROR"):
            self.assertEqual(check_agents(client), 1)
        self.assertIn("migrate_database.py", stdout.getvalue())


class MigrationStatusTests(unittest.TestCase):
    def test_sentinel_exists(self):
        client = MagicMock()
        self.assertTrue(check_migration_status(client, "keywords"))
        client.table.assert_called_once_with("keywords")

    def test_sentinel_missing(self):
        client = MagicMock()
        client.table.return_value.exists.side_effect = missing_table_error("keywords")
        self.assertFalse(check_migration_status(client, "keywords"))

    def test_other_errors_propagate(self):
        client = MagicMock()
        client.table.return_value.exists.side_effect = BackendRequestError(
            "Invalid API key", status_code=401
        )
        with self.assertRaises(BackendRequestError):
            check_migration_status(client, "keywords")


@patch("sys.stdout", new_callable=io.StringIO)
class CheckConnectionTests(unittest.TestCase):
    def test_mask_key(self, _stdout):
        self.assertEqual(mask_key("a" * 40), "a" * 20 + "...")
        self.assertEqual(mask_key("abcdefgh"), "abcd...")
        self.assertEqual(mask_key(None), "MISSING")

    def test_unauthorized(self, stdout):
        client = MagicMock()
        client.check_reachable.return_value = 401
        self.assertFalse(check_project_status(client, "abc"))
        self.assertIn(
            "https://supabase.com/dashboard/project/abc/settings/api", stdout.getvalue()
        )

    def test_reachable(self, _stdout):
        client = MagicMock()
        for status in (200, 404):
            client.check_reachable.return_value = status
            self.assertTrue(check_project_status(client, "abc"))

    def test_server_error(self, _stdout):
        client = MagicMock()
        client.check_reachable.return_value = 503
        self.assertFalse(check_project_status(client, "abc"))

    def test_database_query(self, stdout):
        client = MagicMock()
        client.table.return_value.find.return_value = []
        self.assertTrue(check_database(client, "abc"))

        client.table.return_value.find.side_effect = BackendRequestError(
            "JWT expired", status_code=401, code="PGRST301"
        )
        self.assertFalse(check_database(client, "abc"))
        self.assertIn("invalid or expired", stdout.getvalue())


@patch("sys.stdout", new_callable=io.StringIO)
class VerifyMigrationTests(unittest.TestCase):
    def setUp(self):
        self.client = MagicMock()
        self.client.table.return_value.count.return_value = 3
        self.client.table.return_value.find.return_value = []
        self.client.get_bucket.return_value = {"id": "uploads", "public": True}

    def test_everything_present(self, _stdout):
        self.assertEqual(verify(self.client), 0)
        self.assertEqual(self.client.get_bucket.call_count, len(EXPECTED_BUCKETS))
        # one handle per table plus the agent listing
        self.assertEqual(self.client.table.call_count, len(EXPECTED_TABLES) + 1)

    def test_missing_bucket(self, stdout):
        def get_bucket(name):
            if name == "uploads":
                raise BackendRequestError("Bucket not found", status_code=404)
            return {"id": name, "public": False}

        self.client.get_bucket.side_effect = get_bucket
        self.assertEqual(verify(self.client), 1)
        self.assertIn("1 storage buckets missing", stdout.getvalue())

    def test_missing_table(self, stdout):
        self.client.table.return_value.count.side_effect = missing_table_error("keywords")
        self.assertEqual(verify(self.client), 1)
        self.assertIn(f"{len(EXPECTED_TABLES)} tables missing", stdout.getvalue())


class CheckSchemaTests(unittest.TestCase):
    def test_reports_missing_columns(self):
        client = MagicMock()
        handles = {"articles": MagicMock(), "content_queue": MagicMock()}
        handles["articles"].exists.side_effect = BackendRequestError(
            "column articles.source_idea_id does not exist", status_code=400
        )
        client.table.side_effect = handles.get

        missing = missing_columns(
            client, {"articles": ("source_idea_id",), "content_queue": ("featured_image_url",)}
        )

        self.assertEqual(
            missing,
            [("articles", "source_idea_id", "column articles.source_idea_id does not exist")],
        )
        handles["content_queue"].exists.assert_called_once_with(("featured_image_url",))



class ImportKeywordsTests(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def test_parse_int(self):
        self.assertEqual(parse_int("1200"), 1200)
        self.assertEqual(parse_int("1,200"), 1)
        self.assertEqual(parse_int("12.5"), 12)
        self.assertIsNone(parse_int(""))
        self.assertIsNone(parse_int("n/a"))
        self.assertIsNone(parse_int(None))

    def test_reads_and_normalises_rows(self):
        csv_path = self.tmp / "keywords.csv"
        csv_path.write_text(
            "Keyword,Search Volume,Difficulty,Priority,Status,Current Ranking,Category\n"
            "online mba,5400,62,1,Ranked,14,Business\n"
            '"nursing degree,880,,,,,\n'
            ",10,1,1,queued,,\n",
            encoding="utf-8",
        )

        keywords = prepare_keywords(read_keyword_rows(csv_path), "user-1")

        self.assertEqual(len(keywords), 2)
        first, second = keywords
        self.assertEqual(first["keyword"], "online mba")
        self.assertEqual(first["search_volume"], 5400)
        self.assertEqual(first["difficulty"], 62)
        self.assertEqual(first["priority"], 1)
        self.assertEqual(first["status"], "ranked")
        self.assertEqual(first["current_ranking"], 14)
        self.assertEqual(first["category"], "Business")
        self.assertEqual(first["list_type"], "currently_ranked")
        self.assertEqual(first["user_id"], "user-1")

        self.assertEqual(second["keyword"], "nursing degree")
        self.assertEqual(second["difficulty"], 0)
        self.assertEqual(second["priority"], 3)
        self.assertEqual(second["status"], "queued")
        self.assertIsNone(second["current_ranking"])
        self.assertIsNone(second["category"])

    def test_imports_in_batches(self):
        table = MagicMock()
        table.create_many.side_effect = [
            [{"id": "1"}, {"id": "2"}],
            BackendRequestError("duplicate key value", status_code=409),
            [{"id": "5"}],
        ]
        keywords = [{"keyword": f"kw{i}"} for i in range(5)]

        summary = import_keywords(table, keywords, batch_size=2, delay=0)

        self.assertEqual(table.create_many.call_count, 3)
        self.assertEqual(table.create_many.call_args_list[2].args[0], [{"keyword": "kw4"}])
        self.assertEqual(summary.success_count, 3)
        self.assertEqual(summary.error_count, 2)
        self.assertEqual(summary.errors, [(2, "duplicate key value")])


def _applies_until(failing_name):
    def apply(migration):
        if migration.name == failing_name:
            return MigrationResult(migration, FAILED, "syntax error at or near")
        return MigrationResult(migration, APPLIED)

    return apply


@patch("sys.argv", ["migrate_database.py"])
@patch("sys.stdout", new_callable=io.StringIO)
class MigrateDatabaseMainTests(unittest.TestCase):
    def setUp(self):
        self.migrations_dir = Path(tempfile.mkdtemp())
        for name, table in (("001_first", "first_t"), ("002_second", "second_t"), ("003_third", "third_t")):
            (self.migrations_dir / f"{name}.sql").write_text(
                f"CREATE TABLE {table} (id int);", encoding="utf-8"
            )
        self.settings = Settings(
            migrations_dir=str(self.migrations_dir),
            supabase_url="https://abc.supabase.co",
            supabase_service_role_key="service-key",
            supabase_project_ref="abc",
            supabase_access_token=None,
            database_url=None,
        )
        self.client = MagicMock()
        patches = [
            patch.object(migrate_database, "get_settings", return_value=self.settings),
            patch.object(migrate_database, "get_admin_client", return_value=self.client),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def tearDown(self):
        shutil.rmtree(self.migrations_dir)

    @patch.object(migrate_database, "select_runner", return_value=None)
    def test_no_runner_and_already_migrated(self, _select, stdout):
        self.assertEqual(migrate_database.main(), 0)
        self.client.table.assert_called_once_with("keywords")
        self.assertIn("already migrated", stdout.getvalue())
        self.assertNotIn("sql/new", stdout.getvalue())

    @patch.object(migrate_database, "select_runner", return_value=None)
    def test_no_runner_prints_manual_sql(self, _select, stdout):
        self.client.table.return_value.exists.side_effect = missing_table_error("keywords")

        self.assertEqual(migrate_database.main(), 1)

        output = stdout.getvalue()
        self.assertIn("https://supabase.com/dashboard/project/abc/sql/new", output)
        for table in ("first_t", "second_t", "third_t"):
            self.assertIn(f"CREATE TABLE {table} (id int);", output)

    @patch.object(migrate_database, "select_runner")
    def test_failed_migration_prints_it_and_later_ones(self, select_runner, stdout):
        runner = MagicMock()
        runner.apply.side_effect = _applies_until("002_second")
        select_runner.return_value = runner

        self.assertEqual(migrate_database.main(), 1)

        output = stdout.getvalue()
        self.assertEqual(runner.apply.call_count, 2)
        self.assertIn("Failed: 002_second", output)
        self.assertIn("https://supabase.com/dashboard/project/abc/sql/new", output)
        self.assertIn("CREATE TABLE second_t (id int);", output)
        self.assertIn("CREATE TABLE third_t (id int);", output)
        self.assertNotIn("first_t", output)

    @patch.object(migrate_database, "select_runner")
    def test_all_applied(self, select_runner, stdout):
        runner = MagicMock()
        runner.apply.side_effect = _applies_until(None)
        select_runner.return_value = runner

        self.assertEqual(migrate_database.main(), 0)
        self.assertEqual(runner.apply.call_count, 3)
        self.assertNotIn("sql/new", stdout.getvalue())

    @patch.object(migrate_database, "select_runner")
    def test_unreachable_database(self, select_runner, stdout):
        select_runner.side_effect = OperationalError("connect", {}, Exception("timeout"))

        self.assertEqual(migrate_database.main(), 1)
        self.assertIn("CREATE TABLE first_t (id int);", stdout.getvalue())

    def test_missing_migrations_dir(self, stdout):
        self.settings.migrations_dir = str(self.migrations_dir / "missing")
        self.assertEqual(migrate_database.main(), 1)


if __name__ == "__main__":
    unittest.main()
