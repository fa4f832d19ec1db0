from __future__ import annotations

import unittest
from collections.abc import Sequence
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from app.domain.job_catalog import JobRecord, StoredJob
from app.parsers.job_catalog_parser import SAMPLE_CSV, Delimiter
from app.repositories.job_catalog_store import InMemoryJobCatalogStore
from app.services.job_catalog_import_service import (
    CatalogFormatError,
    CatalogPersistenceError,
    JobCatalogImportService,
)
from db.base import Base
from db.models import SiteJob
from db.repositories.errors import JobPersistenceError
from db.repositories.site_job_repository import SiteJobRepository


class _ReadOnlyStore(InMemoryJobCatalogStore):
    def insert_jobs(self, site_id: str, records: Sequence[JobRecord]) -> int:
        raise JobPersistenceError("read only")


class TestJobCatalogImportService(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryJobCatalogStore()
        self.db = MagicMock()
        self.service = JobCatalogImportService(
            similarity_threshold=0.8,
            log_validation_errors=False,
            store_factory=lambda db: self.store,
        )

    def test_preview_does_not_persist(self) -> None:
        report = self.service.preview_import(
            content=SAMPLE_CSV.encode("utf-8"),
            file_name="sample_jobs.csv",
            site_id="site1",
            db=self.db,
        )

        self.assertEqual(report.valid_count, 4)
        self.assertEqual(self.store.list_jobs("site1"), [])
        self.db.commit.assert_not_called()

    def test_import_persists_valid_jobs_and_commits(self) -> None:
        result = self.service.import_catalog(
            content=SAMPLE_CSV.encode("utf-8"),
            file_name="sample_jobs.csv",
            site_id="site1",
            db=self.db,
        )

        self.assertEqual(result.inserted_count, 4)
        self.db.commit.assert_called_once()
        stored = self.store.list_jobs("site1")
        self.assertEqual([job.job_id for job in stored], ["ALB-001", "CIM-001", "CIM-002", "EST-001"])
        self.assertEqual({job.category for job in stored}, {"ALB", "CIM", "EST"})
        self.assertEqual({job.status for job in stored}, {"pending"})

    def test_second_import_reports_duplicates(self) -> None:
        kwargs = {
            "content": SAMPLE_CSV.encode("utf-8"),
            "file_name": "sample_jobs.csv",
            "site_id": "site1",
            "db": self.db,
        }
        self.service.import_catalog(**kwargs)

        second = self.service.import_catalog(**kwargs)

        self.assertEqual(second.inserted_count, 0)
        self.assertEqual(second.report.duplicate_count, 4)
        self.assertEqual(len(self.store.list_jobs("site1")), 4)

    def test_decodes_utf8_bom_and_uses_tab_for_spreadsheet_names(self) -> None:
        content = "job_id\tdescription\tunit\tquantity\tunit_price\nCIM-001\tEXCAVACIÓN POR MEDIOS\tM3\t1\t2"

        report = self.service.preview_import(
            content=content.encode("utf-8-sig"),
            file_name="catalog.xlsx",
            site_id="site1",
            db=self.db,
        )

        self.assertEqual(report.valid_count, 1)
        self.assertEqual(report.valid_records[0].job_id, "CIM-001")

    def test_explicit_delimiter_overrides_file_name(self) -> None:
        content = "job_id\tdescription\tunit\tquantity\tunit_price\nCIM-001\tEXCAVACIÓN POR MEDIOS\tM3\t1\t2"

        report = self.service.preview_import(
            content=content.encode("utf-8"),
            file_name="catalog.csv",
            site_id="site1",
            db=self.db,
            delimiter=Delimiter.TAB,
        )

        self.assertEqual(report.valid_count, 1)

    def test_rejects_non_utf8_content(self) -> None:
        with self.assertRaises(CatalogFormatError):
            self.service.preview_import(
                content=b"\xff\xfe\x00bad",
                file_name="catalog.csv",
                site_id="site1",
                db=self.db,
            )

    def test_rejects_empty_content(self) -> None:
        with self.assertRaises(CatalogFormatError):
            self.service.preview_import(content=b"  \n", file_name="catalog.csv", site_id="site1", db=self.db)

    def test_persistence_failure_rolls_back(self) -> None:
        service = JobCatalogImportService(
            similarity_threshold=0.8,
            log_validation_errors=False,
            store_factory=lambda db: _ReadOnlyStore(),
        )

        with self.assertRaises(CatalogPersistenceError):
            service.import_catalog(
                content=SAMPLE_CSV.encode("utf-8"),
                file_name="sample_jobs.csv",
                site_id="site1",
                db=self.db,
            )

        self.db.rollback.assert_called_once()
        self.db.commit.assert_not_called()

    def test_statistics_aggregate_stored_jobs(self) -> None:
        self.store.add(
            StoredJob(
                site_id="site1",
                job_id="CIM-001",
                description="EXCAVACIÓN",
                unit="M3",
                quantity=2.0,
                unit_price=10.0,
                concept_id="cimentacion-principal",
                category="CIM",
            )
        )
        self.store.add(
            StoredJob(
                site_id="site1",
                job_id="ELE-001",
                description="CABLEADO",
                unit="ML",
                quantity=3.0,
                unit_price=5.0,
                concept_id="concepto-general",
                category=None,
                status="completed",
            )
        )

        statistics = self.service.get_statistics(site_id="site1", db=self.db)

        self.assertEqual(statistics.total_jobs, 2)
        self.assertAlmostEqual(statistics.total_value, 35.0)
        self.assertEqual(statistics.jobs_by_category, {"CIM": 1, "Unknown": 1})
        self.assertEqual(statistics.jobs_by_status, {"pending": 1, "completed": 1})


class TestJobCatalogImportServiceWithDatabase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine("sqlite://")
        Base.metadata.create_all(self.engine, tables=[SiteJob.__table__])
        self.db = Session(self.engine)
        self.service = JobCatalogImportService(similarity_threshold=0.8, log_validation_errors=False)

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def test_repeated_job_id_in_one_catalog_imports_first_row_only(self) -> None:
        content = (
            "job_id,description,unit,quantity,unit_price\n"
            "CIM-001,EXCAVACIÓN POR MEDIOS MECÁNICOS,M3,2,10\n"
            "CIM-001,EXCAVACIÓN REPETIDA EN EL CATÁLOGO,M3,5,99\n"
            "CIM-002,EXCAVACIÓN POR MEDIOS MANUALES,M3,1,5"
        )

        result = self.service.import_catalog(
            content=content.encode("utf-8"),
            file_name="catalog.csv",
            site_id="site1",
            db=self.db,
        )

        self.assertEqual(result.inserted_count, 2)
        self.assertEqual(result.report.duplicate_count, 1)
        self.assertEqual([record.job_id for record in result.report.valid_records], ["CIM-001", "CIM-002"])
        self.assertAlmostEqual(result.report.total_value, 25.0)

        stored = SiteJobRepository(self.db).list_jobs("site1")
        self.assertEqual([job.job_id for job in stored], ["CIM-001", "CIM-002"])
        self.assertEqual(stored[0].description, "EXCAVACIÓN POR MEDIOS MECÁNICOS")


if __name__ == "__main__":
    unittest.main()
