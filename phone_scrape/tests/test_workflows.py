"""End-to-end tests for the catalog build, with the network mocked out."""

import json
from unittest.mock import patch

import pandas as pd
import pytest
import requests  # type: ignore[import-untyped]

from phone_scrape import cli
from phone_scrape.config import EXCEL_COLUMNS
from phone_scrape.excel_utils import write_rows_to_excel
from phone_scrape.models import ProductRow
from phone_scrape.scraper import FetchError, fetch_html
from phone_scrape.workflows import build_catalog_workflow

IPHONE_IMG = "https://cdn.tiendamovil.com.py/img/iphone-13.jpg?v=2"
GALAXY_IMG = "https://tiendamovil.com.py/img/galaxy-a54.png"


class TestFetchHtml:
    def test_returns_page_text(self, fake_session, catalog_url):
        session = fake_session({catalog_url: "<html>ok</html>"})
        assert fetch_html(catalog_url, session=session, timeout=5) == "<html>ok</html>"
        session.get.assert_called_once_with(catalog_url, timeout=5)

    def test_http_error_is_fatal(self, fake_session, catalog_url):
        with pytest.raises(FetchError, match="HTTP Error 404"):
            fetch_html(catalog_url, session=fake_session({}))

    def test_timeout_is_fatal(self, fake_session, catalog_url):
        session = fake_session({catalog_url: requests.exceptions.ReadTimeout("slow")})
        with pytest.raises(FetchError, match="Timeout"):
            fetch_html(catalog_url, session=session)

    def test_fetch_error_is_value_error(self):
        assert issubclass(FetchError, ValueError)


class TestBuildCatalogWorkflow:
    @pytest.fixture
    def paths(self, tmp_path):
        return tmp_path / "data" / "products-paraguay.xlsx", tmp_path / "images"

    def test_full_run(self, fake_session, sample_html, catalog_url, paths):
        output, images = paths
        session = fake_session({
            catalog_url: sample_html,
            IPHONE_IMG: b"jpg",
            # galaxy image is missing and will 404
        })

        summary = build_catalog_workflow(
            url=catalog_url, output_path=output, images_dir=images, session=session,
        )

        assert summary["raw_items"] == 4
        assert summary["rows"] == 3
        assert summary["images_downloaded"] == 1

        df = pd.read_excel(output, dtype=object)
        assert list(df.columns) == EXCEL_COLUMNS
        assert list(df["id"].astype(str)) == ["1", "2", "3"]
        assert list(df["brand_name"]) == ["Apple", "Samsung", "Sin marca"]
        assert list(df["model"]) == ["iPhone 13 128GB", "Samsung Galaxy A54 8GB RAM 256GB", "Nokia G21"]
        assert df.loc[0, "images"] == "/images/phones-paraguay/apple-iphone-13-128gb.jpg"
        assert df.loc[1, "images"] == GALAXY_IMG
        assert (images / "apple-iphone-13-128gb.jpg").read_bytes() == b"jpg"

    def test_skip_images_keeps_remote_urls(self, fake_session, sample_html, catalog_url, paths):
        output, images = paths
        session = fake_session({catalog_url: sample_html})

        summary = build_catalog_workflow(
            url=catalog_url, output_path=output, images_dir=images,
            download_images=False, session=session,
        )

        assert summary["images_downloaded"] == 0
        assert session.get.call_count == 1
        df = pd.read_excel(output, dtype=object)
        assert df.loc[0, "images"] == IPHONE_IMG

    def test_fetch_failure_writes_nothing(self, fake_session, catalog_url, paths):
        output, images = paths
        with pytest.raises(FetchError):
            build_catalog_workflow(
                url=catalog_url, output_path=output, images_dir=images,
                session=fake_session({}),
            )
        assert not output.exists()


class TestCli:
    def test_fetch_failure_exits_non_zero(self, tmp_path):
        with patch.object(cli, "build_catalog_workflow", side_effect=FetchError("boom")):
            assert cli.main(["--no-log-file", "--output", str(tmp_path / "x.xlsx")]) == 1

    def test_build_passes_options(self, tmp_path):
        summary = {"rows": 0, "output_path": str(tmp_path / "x.xlsx")}
        with patch.object(cli, "build_catalog_workflow", return_value=summary) as build:
            code = cli.main([
                "--no-log-file", "--skip-images", "--timeout", "5",
                "--output", str(tmp_path / "x.xlsx"), "--images-dir", str(tmp_path / "img"),
            ])

        assert code == 0
        kwargs = build.call_args.kwargs
        assert kwargs["download_images"] is False
        assert kwargs["timeout"] == 5.0
        assert kwargs["images_dir"] == str(tmp_path / "img")

    def test_sync_feed_missing_workbook(self, tmp_path):
        code = cli.main([
            "--no-log-file", "--sync-feed", str(tmp_path / "missing.xlsx"),
            "--feed-json", str(tmp_path / "p.json"), "--docs-json", str(tmp_path / "d.json"),
        ])
        assert code == 1

    def test_sync_feed_writes_both_copies(self, tmp_path):
        excel = tmp_path / "products.xlsx"
        write_rows_to_excel([
            ProductRow(id="1", brand_id="apple", brand_name="Apple", model="iPhone 13",
                       price=4990000, storage_options="128GB"),
        ], excel)
        public, docs = tmp_path / "public.json", tmp_path / "docs" / "products.json"

        code = cli.main([
            "--no-log-file", "--sync-feed", str(excel),
            "--feed-json", str(public), "--docs-json", str(docs),
        ])

        assert code == 0
        written = json.loads(public.read_text(encoding="utf-8"))
        assert [p["model"] for p in written] == ["iPhone 13"]
        assert written[0]["storage_options"] == ["128GB"]
        assert docs.read_text(encoding="utf-8") == public.read_text(encoding="utf-8")

    def test_sync_feed_rejects_non_workbook(self, tmp_path):
        bad = tmp_path / "bad.xlsx"
        bad.write_text("id,model\n1,iPhone\n", encoding="utf-8")

        code = cli.main([
            "--no-log-file", "--sync-feed", str(bad),
            "--feed-json", str(tmp_path / "p.json"), "--docs-json", str(tmp_path / "d.json"),
        ])

        assert code == 1
        assert not (tmp_path / "p.json").exists()

    def test_rename_images_updates_feed(self, tmp_path):
        images = tmp_path / "images"
        images.mkdir()
        (images / "1.jpg").write_bytes(b"one")
        feed = tmp_path / "products.json"
        feed.write_text(json.dumps([
            {"id": "1", "model": "iPhone 13", "brand": {"name": "Apple"},
             "images": ["/images/phones-paraguay/1.jpg"]},
        ]), encoding="utf-8")

        code = cli.main([
            "--no-log-file", "--rename-images", "--images-dir", str(images),
            "--feed-json", str(feed), "--docs-json", str(tmp_path / "docs.json"),
        ])

        assert code == 0
        assert (images / "apple-iphone-13.jpg").read_bytes() == b"one"
        updated = json.loads(feed.read_text(encoding="utf-8"))
        assert updated[0]["images"] == ["/images/phones-paraguay/apple-iphone-13.jpg"]

    def test_rename_images_malformed_feed(self, tmp_path):
        feed = tmp_path / "products.json"
        feed.write_text("[{\"id\": \"1\",", encoding="utf-8")

        code = cli.main([
            "--no-log-file", "--rename-images", "--images-dir", str(tmp_path),
            "--feed-json", str(feed), "--docs-json", str(tmp_path / "docs.json"),
        ])

        assert code == 1
