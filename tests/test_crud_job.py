"""
Tests for JobRepository against the seeded SQLite database.
"""

import pytest

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.crud import JobRepository


@pytest.fixture
def jobs(store, seeded):
    return JobRepository(store)


@pytest.fixture
def t1(seeded):
    return {"id": seeded["T1"], "companyHandle": "c1", "title": "T1", "salary": 10000, "equity": 0.2}


@pytest.fixture
def t2(seeded):
    return {"id": seeded["T2"], "companyHandle": "c2", "title": "T2", "salary": 20000, "equity": 0}


class TestCreate:

    def test_create(self, jobs, seeded):
        job = jobs.create({"companyHandle": "c1", "title": "Title", "salary": 50000, "equity": 0.111})

        assert isinstance(job["id"], int)
        assert job["id"] not in seeded.values()
        assert job == {"id": job["id"], "companyHandle": "c1", "title": "Title", "salary": 50000, "equity": 0.111}
        assert jobs.get(job["id"])["title"] == "Title"

    def test_create_without_salary_or_equity(self, jobs):
        job = jobs.create({"companyHandle": "c3", "title": "Intern"})
        assert job["salary"] is None
        assert job["equity"] is None

    def test_unknown_company(self, jobs):
        with pytest.raises(BadRequestError):
            jobs.create({"companyHandle": "asdf", "title": "Title", "salary": 50000, "equity": 0.111})


class TestFind:

    def test_find_all(self, jobs, t1, t2):
        assert jobs.find_all() == [t1, t2]

    def test_title_filter(self, jobs, t1, t2):
        assert jobs.find_some({"title": "t"}) == [t1, t2]
        assert jobs.find_some({"title": "2"}) == [t2]

    def test_min_salary(self, jobs, t2):
        assert jobs.find_some({"minSalary": 15000}) == [t2]

    def test_has_equity_true(self, jobs, t1):
        assert jobs.find_some({"hasEquity": True}) == [t1]

    def test_has_equity_false_returns_all(self, jobs, t1, t2):
        assert jobs.find_some({"hasEquity": False}) == [t1, t2]

    def test_combined_filters(self, jobs, t2):
        assert jobs.find_some({"minSalary": 15000, "hasEquity": False}) == [t2]
        assert jobs.find_some({"title": "t", "minSalary": 10001, "hasEquity": "false"}) == [t2]

    def test_unsupported_filter(self, jobs):
        with pytest.raises(BadRequestError):
            jobs.find_some({"title": "t", "companyHandle": "c1"})


class TestGet:

    def test_get_with_company(self, jobs, seeded):
        assert jobs.get(seeded["T1"]) == {
            "id": seeded["T1"],
            "title": "T1",
            "salary": 10000,
            "equity": 0.2,
            "company": {
                "handle": "c1",
                "name": "C1",
                "description": "Desc1",
                "numEmployees": 1,
                "logoUrl": "http://c1.img",
            },
        }

    def test_not_found(self, jobs):
        with pytest.raises(NotFoundError):
            jobs.get(0)


class TestUpdate:

    def test_update(self, jobs, t1):
        job = jobs.update(t1["id"], {"title": "New", "salary": 1, "equity": 0.5})
        assert job == {**t1, "title": "New", "salary": 1, "equity": 0.5}

    def test_not_found(self, jobs):
        with pytest.raises(NotFoundError):
            jobs.update(0, {"title": "New"})

    def test_no_data(self, jobs, t1):
        with pytest.raises(BadRequestError):
            jobs.update(t1["id"], {})


class TestRemove:

    def test_remove_cascades_to_applications(self, jobs, store, t1):
        jobs.remove(t1["id"])

        with pytest.raises(NotFoundError):
            jobs.get(t1["id"])
        assert store.execute("SELECT username FROM applications WHERE job_id = $1", [t1["id"]]) == []

    def test_not_found(self, jobs):
        with pytest.raises(NotFoundError):
            jobs.remove(0)
