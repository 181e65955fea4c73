"""Tests for LinkedIn profile insights."""

import unittest

from careerbot.models import MAX_SKILLS, ProfileRecord, profile_from_scrape
from careerbot.utils.profile_insights import (
    DIVERSE_SKILLS_THRESHOLD,
    analyze_profile,
    career_insights,
    format_profile_for_chat,
)


def senior_profile():
    return ProfileRecord(
        full_name="Grace Hopper",
        headline="Engineering Director",
        job_title="Director of Engineering",
        company_name="Navy Labs",
        company_industry="Software",
        connections=800,
        current_job_duration_in_yrs=8,
        about="Built compilers. " * 20,
        experiences=[
            {"title": "Director of Engineering"},
            {"title": "Navy Labs", "breakdown": True, "subComponents": [{"title": "Senior Engineer"}]},
            {"title": "Engineer"},
        ],
        educations=[{"title": "Yale", "subtitle": "PhD Mathematics"}],
        skills=[{"title": f"Skill {i}"} for i in range(12)],
        certificates=[{"title": "COBOL Certified"}],
    )


class TestAnalyzeProfile(unittest.TestCase):
    def test_senior_profile(self):
        insights = analyze_profile(senior_profile())

        self.assertEqual(insights.experience_level, "senior")
        self.assertTrue(insights.leadership_experience)
        self.assertEqual(insights.key_skills, [f"Skill {i}" for i in range(10)])
        self.assertEqual(insights.career_progression[1], "Senior Engineer at Navy Labs")
        self.assertEqual(insights.certifications, ["COBOL Certified"])
        self.assertIn("Strong professional network", insights.strengths)
        self.assertIn("Diverse and comprehensive skill set", insights.strengths)
        self.assertEqual(insights.recommendations, [])

    def test_sparse_profile(self):
        insights = analyze_profile(ProfileRecord(experiences=[{"title": "Intern"}]))

        self.assertEqual(insights.experience_level, "junior")
        self.assertFalse(insights.leadership_experience)
        self.assertEqual(insights.strengths, [])
        self.assertEqual(len(insights.recommendations), 3)

    def test_diverse_skills_boundary(self):
        for count, expected in [(DIVERSE_SKILLS_THRESHOLD, False), (DIVERSE_SKILLS_THRESHOLD + 1, True)]:
            with self.subTest(count=count):
                profile = ProfileRecord(skills=[{"title": f"Skill {i}"} for i in range(count)])
                strengths = analyze_profile(profile).strengths
                self.assertEqual("Diverse and comprehensive skill set" in strengths, expected)

    def test_diverse_skills_reachable_after_capture(self):
        raw = {"skills": [{"title": f"Skill {i}"} for i in range(40)]}

        profile = profile_from_scrape(raw, "https://linkedin.com/in/ada")

        self.assertEqual(len(profile.skills), MAX_SKILLS)
        self.assertIn("Diverse and comprehensive skill set", analyze_profile(profile).strengths)

    def test_empty_profile_has_no_level(self):
        self.assertEqual(analyze_profile(ProfileRecord()).experience_level, "")


class TestChatSummaries(unittest.TestCase):
    def test_render_markdown(self):
        profile = senior_profile()

        summary = format_profile_for_chat(profile)
        self.assertIn("**Name:** Grace Hopper", summary)
        self.assertIn("**Current Role:** Director of Engineering at Navy Labs", summary)
        self.assertIn("**Education:** PhD Mathematics from Yale", summary)
        self.assertIn("**Network:** 800 connections", summary)

        notes = career_insights(profile)
        self.assertIn("**Experience Level:** Senior", notes)
        self.assertIn("**Leadership Experience:** Demonstrated", notes)
        self.assertIn("- Demonstrated leadership experience", notes)


if __name__ == "__main__":
    unittest.main()
