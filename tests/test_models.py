"""Tests for scrape-payload mapping."""

import unittest

from careerbot.models import (
    MAX_AWARDS,
    MAX_CERTIFICATES,
    MAX_EDUCATIONS,
    MAX_EXPERIENCES,
    MAX_SKILLS,
    JobRecord,
    job_from_hit,
    job_from_scrape,
    profile_from_scrape,
)


class TestProfileMapping(unittest.TestCase):
    def test_lists_are_truncated_at_capture(self):
        raw = {
            "fullName": "Ada Lovelace",
            "experiences": [{"title": f"Role {i}"} for i in range(9)],
            "educations": [{"title": f"School {i}"} for i in range(6)],
            "skills": [{"title": f"Skill {i}"} for i in range(30)],
            "licenseAndCertificates": [{"title": f"Cert {i}"} for i in range(8)],
            "volunteerAndAwards": [{"title": f"Award {i}"} for i in range(7)],
        }
        profile = profile_from_scrape(raw, "https://linkedin.com/in/ada")

        self.assertEqual(len(profile.experiences), MAX_EXPERIENCES)
        self.assertEqual(len(profile.educations), MAX_EDUCATIONS)
        self.assertEqual(len(profile.skills), MAX_SKILLS)
        self.assertEqual(len(profile.certificates), MAX_CERTIFICATES)
        self.assertEqual(len(profile.awards), MAX_AWARDS)
        self.assertEqual((MAX_EXPERIENCES, MAX_EDUCATIONS, MAX_SKILLS, MAX_CERTIFICATES, MAX_AWARDS), (5, 3, 15, 5, 3))
        self.assertEqual(profile.experiences[0]["title"], "Role 0")
        self.assertEqual(profile.linkedin_url, "https://linkedin.com/in/ada")
        self.assertTrue(profile.scraped_at)

    def test_empty_payload_defaults_every_field(self):
        profile = profile_from_scrape({}, "https://linkedin.com/in/x")

        self.assertEqual(profile.full_name, "")
        self.assertEqual(profile.connections, 0)
        self.assertIsNone(profile.mobile_number)
        self.assertEqual(profile.skills, [])
        self.assertEqual(profile.current_job_duration_in_yrs, 0.0)

    def test_wrong_types_fall_back_to_defaults(self):
        raw = {
            "fullName": None,
            "connections": "500",
            "followers": {"n": 1},
            "skills": "Python, SQL",
            "experiences": [{"title": "ok"}, "not-a-dict", None],
        }
        profile = profile_from_scrape(raw, "https://linkedin.com/in/x")

        self.assertEqual(profile.full_name, "")
        self.assertEqual(profile.connections, 500)
        self.assertEqual(profile.followers, 0)
        self.assertEqual(profile.skills, [])
        self.assertEqual(profile.experiences, [{"title": "ok"}])


class TestJobMapping(unittest.TestCase):
    def test_job_from_scrape_maps_fields(self):
        raw = {
            "id": 4012345,
            "title": "Data Scientist",
            "companyName": "Acme",
            "location": "",
            "descriptionHtml": "<p>Build <b>models</b></p>",
            "salaryInfo": ["$100,000", "$150,000"],
            "employmentType": "Full-time",
            "seniorityLevel": "Mid-Senior level",
            "postedAt": "2025-01-15",
            "link": "https://www.linkedin.com/jobs/view/4012345",
            "companyEmployeesCount": 250,
            "industries": "Software",
            "benefits": ["Dental", None, "401k"],
        }
        job = job_from_scrape(raw, keywords="Data Scientist", default_location="United States")

        self.assertEqual(job.id, "4012345")
        self.assertEqual(job.company, "Acme")
        self.assertEqual(job.location, "United States")
        self.assertIn("Build", job.description)
        self.assertNotIn("<", job.description)
        self.assertEqual(job.salary, "$100,000 - $150,000")
        self.assertEqual(job.company_size, "250")
        self.assertEqual(job.benefits, ["Dental", "401k"])
        self.assertEqual(job.keywords, ["data scientist"])
        self.assertIsNone(job.vector)
        self.assertFalse(job.is_placeholder)

    def test_index_document_uses_index_field_names(self):
        job = JobRecord(id="1", title="Engineer", company="Acme", description="Ship code", job_type="Contract")
        doc = job.to_index_document()

        self.assertEqual(doc["jobType"], "Contract")
        self.assertEqual(doc["text"], "Engineer Acme Ship code")
        self.assertNotIn("vector", doc)
        self.assertNotIn("score", doc)

        job.vector = [0.5, 0.25]
        self.assertEqual(job.to_index_document()["vector"], [0.5, 0.25])

    def test_job_from_hit_reads_source_and_score(self):
        hit = {
            "_id": "abc",
            "_score": 3.5,
            "_source": {"title": "Engineer", "experienceLevel": "Entry level", "scrapedAt": "2025-01-01T00:00:00Z"},
        }
        job = job_from_hit(hit)

        self.assertEqual(job.id, "abc")
        self.assertEqual(job.experience_level, "Entry level")
        self.assertEqual(job.score, 3.5)


if __name__ == "__main__":
    unittest.main()
