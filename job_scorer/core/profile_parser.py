"""
Profile Parser - Builds candidate profiles from resumes and profile exports.
Supports JSON, PDF, DOCX and plain text.
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

import pdfplumber
from docx import Document

from .matcher import SKILL_VOCABULARY
from .models import (
    EducationEntry,
    EmploymentEntry,
    ExperienceLevel,
    Profile,
    Skill,
    SkillLevel,
)


DATE_RANGE = re.compile(r'\(?(\d{4})\s*[-–]\s*(\d{4}|present|current)\)?', re.IGNORECASE)
BULLETS = ('•', '-', '*', '–')


class ProfileParser:
    """Parses candidate profiles from various document formats."""

    # Title keywords that suggest a seniority band, checked in order
    EXPERIENCE_LEVELS = {
        ExperienceLevel.EXECUTIVE: ["director", "vp", "cto", "head of", "chief"],
        ExperienceLevel.LEAD: ["lead", "principal", "staff", "architect"],
        ExperienceLevel.SENIOR: ["senior", "sr."],
        ExperienceLevel.ENTRY: ["junior", "entry", "associate", "intern", "graduate"],
    }

    LEVEL_INDICATORS = [
        (SkillLevel.EXPERT, ["expert", "extensive", "mastery"]),
        (SkillLevel.ADVANCED, ["advanced", "proficient", "experienced"]),
        (SkillLevel.BEGINNER, ["basic", "familiar", "learning", "exposure"]),
    ]

    TITLE_KEYWORDS = [
        "engineer", "developer", "manager", "analyst", "designer",
        "director", "lead", "architect", "consultant", "specialist",
        "coordinator", "administrator", "scientist", "intern",
    ]

    EXPERIENCE_HEADING = re.compile(
        r'^((work|professional)\s+)?experience\b|^employment\s+history', re.IGNORECASE
    )
    SECTION_END = re.compile(
        r'^(education|skills|certifications|projects|references)', re.IGNORECASE
    )

    DEGREE_PATTERNS = [
        r"(bachelor(?:'?s)?(?: of (?:science|arts))?|b\.s\.|b\.a\.)\s*(?:in|,)\s+([A-Za-z][A-Za-z ]+)",
        r"(master(?:'?s)?(?: of (?:science|arts|business administration))?|m\.s\.|mba)\s*(?:in|,)\s+([A-Za-z][A-Za-z ]+)",
        r"(ph\.?d\.?|doctorate)\s*(?:in|,)\s+([A-Za-z][A-Za-z ]+)",
        r"(associate(?:'?s)?(?: degree)?)\s*(?:in|,)\s+([A-Za-z][A-Za-z ]+)",
    ]

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._readers = {
            ".json": self._read_json,
            ".pdf": self._read_pdf,
            ".docx": self._read_docx,
            ".txt": self._read_plain,
            ".md": self._read_plain,
        }

    def parse_file(self, file_path: str) -> Profile:
        """
        Build a profile from a JSON export or a resume document.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the extension is not supported
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        reader = self._readers.get(path.suffix.lower())
        if reader is None:
            raise ValueError(f"Unsupported file format: {path.suffix or path.name}")

        self.logger.debug(f"Reading profile from {path}")
        return reader(path)

    def _read_json(self, path: Path) -> Profile:
        with open(path, 'r', encoding='utf-8') as f:
            return Profile.from_dict(json.load(f))

    def _read_pdf(self, path: Path) -> Profile:
        with pdfplumber.open(path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
        return self.parse_text("\n".join(pages))

    def _read_docx(self, path: Path) -> Profile:
        document = Document(str(path))
        return self.parse_text("\n".join(p.text for p in document.paragraphs))

    def _read_plain(self, path: Path) -> Profile:
        return self.parse_text(path.read_text(encoding='utf-8'))

    def parse_text(self, text: str) -> Profile:
        """Extract profile information from raw resume text."""
        employment = self._extract_employment(text)

        profile = Profile(
            full_name=self._extract_name(text),
            location=self._extract_location(text),
            skills=self._extract_skills(text),
            employment_history=employment,
            education=self._extract_education(text),
            experience_level=self._estimate_experience_level(employment),
        )

        self.logger.info(
            f"Parsed resume: {len(profile.skills)} skills, "
            f"{len(profile.employment_history)} positions, "
            f"{len(profile.education)} degrees"
        )
        return profile

    def _extract_name(self, text: str) -> str:
        """A "Name:" line, else a short all-alphabetic first line."""
        match = re.search(r'^\s*name:\s*(.+)$', text, re.IGNORECASE | re.MULTILINE)
        if match:
            return match.group(1).strip()

        first = next((line.strip() for line in text.splitlines() if line.strip()), "")
        if re.search(r'@|\.com|resume|\bcv\b', first, re.IGNORECASE):
            return ""
        words = first.split()
        if 1 <= len(words) <= 4 and all(w.replace('.', '').isalpha() for w in words):
            return first
        return ""

    def _extract_location(self, text: str) -> str:
        """Extract a "Location:" line or a "City, ST" pattern from the header."""
        match = re.search(r'^\s*location:\s*(.+)$', text, re.IGNORECASE | re.MULTILINE)
        if match:
            return match.group(1).strip()

        header = "\n".join(text.strip().split('\n')[:6])
        match = re.search(r'\b([A-Z][a-zA-Z]+(?: [A-Z][a-zA-Z]+)*, [A-Z]{2})\b', header)
        return match.group(1) if match else ""

    def _extract_skills(self, text: str) -> list[Skill]:
        """Vocabulary skills mentioned anywhere, levelled by nearby wording."""
        lowered = text.lower()
        skills = []

        for names in SKILL_VOCABULARY.values():
            for name in names:
                pattern = r'(?<![a-z0-9])' + re.escape(name.lower()) + r'(?![a-z0-9])'
                match = re.search(pattern, lowered)
                if match:
                    skills.append(Skill(name=name, level=self._estimate_skill_level(lowered, match.start())))

        return skills

    def _estimate_skill_level(self, text: str, index: int) -> SkillLevel:
        context = text[max(0, index - 60):index + 60]
        for level, indicators in self.LEVEL_INDICATORS:
            if any(indicator in context for indicator in indicators):
                return level
        return SkillLevel.INTERMEDIATE

    def _extract_employment(self, text: str) -> list[EmploymentEntry]:
        """
        Read positions from the experience section.

        A line with a year range or a title keyword opens a position; the
        lines after it are its description until the next position or the
        next resume section.
        """
        lines = [line.strip() for line in text.splitlines()]

        start = next((i for i, line in enumerate(lines) if self.EXPERIENCE_HEADING.match(line)), None)
        if start is None:
            return []

        entries: list[EmploymentEntry] = []
        for i in range(start + 1, len(lines)):
            line = lines[i]
            if self.SECTION_END.match(line):
                break
            if not line:
                continue

            if DATE_RANGE.search(line) or self._looks_like_job_title(line):
                title, company = self._split_position(line)
                if not company:
                    company = self._company_from_next_line(lines, i)
                entries.append(EmploymentEntry(title=title, company=company))
            elif entries and line != entries[-1].company:
                bullet = line.lstrip('•-*– ')
                entries[-1].description = f"{entries[-1].description} {bullet}".strip()

        return entries

    def _looks_like_job_title(self, line: str) -> bool:
        if line.startswith(BULLETS):
            return False
        lowered = line.lower()
        return any(keyword in lowered for keyword in self.TITLE_KEYWORDS)

    def _split_position(self, line: str) -> tuple[str, str]:
        """"Senior Engineer | Acme 2019 - Present" -> ("Senior Engineer", "Acme")."""
        undated = DATE_RANGE.sub('', line).strip()
        parts = re.split(r'\s*[|@]\s*', undated, maxsplit=1)
        company = parts[1] if len(parts) > 1 else ""
        return parts[0].split(',')[0].strip(), company.strip(' ,')

    def _company_from_next_line(self, lines: list[str], index: int) -> str:
        if index + 1 >= len(lines):
            return ""
        candidate = lines[index + 1]
        if not candidate or candidate.startswith(BULLETS) or self._looks_like_job_title(candidate):
            return ""
        if DATE_RANGE.search(candidate):
            return ""
        return candidate

    def _extract_education(self, text: str) -> list[EducationEntry]:
        """Degrees and their fields of study."""
        return [
            EducationEntry(degree=match.group(1).strip(), field=match.group(2).strip())
            for pattern in self.DEGREE_PATTERNS
            for match in re.finditer(pattern, text, re.IGNORECASE)
        ]

    def _estimate_experience_level(
        self,
        employment: list[EmploymentEntry],
    ) -> Optional[ExperienceLevel]:
        """Infer a seniority band from the most recent title."""
        if not employment:
            return None

        title = employment[0].title.lower()
        for level, keywords in self.EXPERIENCE_LEVELS.items():
            if any(keyword in title for keyword in keywords):
                return level
        return ExperienceLevel.MID

    def create_sample_profile(self) -> Profile:
        """Create a sample profile for trying out the scorer."""
        return Profile(
            full_name="Sample User",
            location="Seattle, WA",
            experience_level=ExperienceLevel.SENIOR,
            skills=[
                Skill(name="JavaScript", level=SkillLevel.EXPERT),
                Skill(name="React", level=SkillLevel.EXPERT),
                Skill(name="TypeScript", level=SkillLevel.ADVANCED),
                Skill(name="Node.js", level=SkillLevel.INTERMEDIATE),
            ],
            employment_history=[
                EmploymentEntry(
                    title="Frontend Engineer",
                    company="Northwind Labs",
                    description="Built React applications and TypeScript libraries",
                ),
            ],
            education=[
                EducationEntry(
                    degree="Bachelor of Science",
                    field="Computer Science",
                    institution="Cascade University",
                ),
            ],
        )
