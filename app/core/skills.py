"""
Skill catalog - the predefined skills users pick from, grouped by category.

Users may also enter custom skill names; the catalog is reference data for
pickers and for the discovery category filter, never a whitelist.
"""
from typing import Dict, List, Optional

SKILL_CATEGORIES: Dict[str, List[str]] = {
    "Programming & Development": [
        "JavaScript", "Python", "React", "Node.js", "TypeScript", "HTML/CSS",
        "Java", "C++", "PHP", "Ruby", "Vue.js", "Angular", "Flutter",
        "React Native", "Swift", "Kotlin", "Go", "Rust", "SQL", "MongoDB",
    ],
    "Design & Creative": [
        "UI/UX Design", "Graphic Design", "Figma", "Adobe Photoshop",
        "Adobe Illustrator", "Sketch", "InDesign", "Video Editing", "Animation",
        "Photography", "Digital Art", "Logo Design", "Web Design", "Branding",
    ],
    "Business & Marketing": [
        "Digital Marketing", "SEO", "Social Media Marketing", "Content Writing",
        "Copywriting", "Email Marketing", "Google Ads", "Facebook Ads",
        "Analytics", "Project Management", "Business Strategy", "Sales",
    ],
    "Data & Analytics": [
        "Data Science", "Machine Learning", "Data Analysis", "Excel", "Power BI",
        "Tableau", "R Programming", "Statistics", "Big Data", "AI/ML",
        "Data Visualization",
    ],
    "Languages": [
        "English", "Spanish", "French", "German", "Chinese", "Japanese",
        "Korean", "Italian", "Portuguese", "Arabic",
    ],
    "Music & Arts": [
        "Guitar", "Piano", "Singing", "Music Production", "Drawing", "Painting",
        "Dancing", "Writing", "Poetry",
    ],
    "Life Skills": [
        "Cooking", "Fitness Training", "Yoga", "Meditation", "Public Speaking",
        "Leadership", "Time Management", "Financial Planning", "Gardening",
        "DIY/Crafts",
    ],
}

AVAILABLE_SKILLS: List[str] = [
    skill for skills in SKILL_CATEGORIES.values() for skill in skills
]

_CATEGORY_BY_SKILL = {
    skill: category
    for category, skills in SKILL_CATEGORIES.items()
    for skill in skills
}


def category_of(skill: str) -> Optional[str]:
    """Category of a catalog skill, None for custom skills."""
    return _CATEGORY_BY_SKILL.get(skill)


def skills_in_category(category: str) -> List[str]:
    """Skills of a category; unknown categories have none."""
    return SKILL_CATEGORIES.get(category, [])
