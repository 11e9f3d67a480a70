import uuid
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def new_entry_id() -> str:
    return uuid.uuid4().hex


# --- 1. Entry Schemas ---
class Entry(BaseModel):
    """Base for list-section items. `id` is stable across edits and reorders."""

    model_config = ConfigDict(extra="ignore")

    # field name -> message shown when the field is empty
    REQUIRED_FIELDS: ClassVar[Dict[str, str]] = {}

    id: str = Field(default_factory=new_entry_id)


class Project(Entry):
    REQUIRED_FIELDS: ClassVar[Dict[str, str]] = {
        "name": "Project name is required",
        "description": "Description is required",
    }

    name: str = ""
    projectType: Optional[str] = None
    role: Optional[str] = None
    period: Optional[str] = None
    description: str = ""
    preview: Optional[str] = None


class Achievement(Entry):
    REQUIRED_FIELDS: ClassVar[Dict[str, str]] = {
        "achievement": "Achievement is required",
        "description": "Description is required",
    }

    achievement: str = ""
    event: Optional[str] = None
    date: Optional[str] = None
    description: str = ""


class Leadership(Entry):
    REQUIRED_FIELDS: ClassVar[Dict[str, str]] = {
        "organization": "Organization is required",
        "role": "Role is required",
        "description": "Description is required",
    }

    organization: str = ""
    role: str = ""
    date: Optional[str] = None
    description: str = ""


class Education(Entry):
    REQUIRED_FIELDS: ClassVar[Dict[str, str]] = {
        "degree": "Degree is required",
        "school": "School is required",
    }

    degree: str = ""
    school: str = ""
    location: Optional[str] = None
    graduationDate: Optional[str] = None
    cgpa: Optional[str] = None


class Certificate(Entry):
    REQUIRED_FIELDS: ClassVar[Dict[str, str]] = {
        "name": "Certificate name is required",
    }

    name: str = ""
    issuingOrganization: Optional[str] = None
    date: Optional[str] = None


class Reference(Entry):
    REQUIRED_FIELDS: ClassVar[Dict[str, str]] = {
        "name": "Name is required",
        "contact": "Contact is required",
    }

    name: str = ""
    contact: str = ""
    relation: Optional[str] = None


# --- 2. Document Schema ---
class Personal(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    location: Optional[str] = None


class Styling(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fontFamily: Optional[str] = None
    fontSize: Optional[str] = None
    lineHeight: Optional[str] = None
    textAlign: Optional[str] = None


class Skills(BaseModel):
    model_config = ConfigDict(extra="ignore")

    technicalSkills: Optional[str] = None
    softSkills: Optional[str] = None
    language: Optional[str] = None


class ResumeDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    personal: Personal = Field(default_factory=Personal)
    styling: Styling = Field(default_factory=Styling)
    summary: str = ""
    projects: List[Project] = Field(default_factory=list)
    achievements: List[Achievement] = Field(default_factory=list)
    leadershipAndVolunteering: List[Leadership] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    certificates: List[Certificate] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)


# Document field -> entry model, for every list-valued field
LIST_FIELDS: Dict[str, type] = {
    "projects": Project,
    "achievements": Achievement,
    "leadershipAndVolunteering": Leadership,
    "education": Education,
    "certificates": Certificate,
    "references": Reference,
}

# --- 3. Styling Choices (offered by the editor) ---
FONT_FAMILIES = ["Inter", "Roboto", "Lato", "Montserrat", "Open Sans"]
TEXT_ALIGNMENTS = ["left", "center", "right", "justify"]
FONT_SIZE_RANGE = (0.8, 1.2, 0.05)  # rem
LINE_HEIGHT_RANGE = (1.2, 2.0, 0.1)

# --- 4. Sections ---
SECTION_TITLES = {
    "summary": "Professional Summary",
    "projects": "Projects",
    "achievements": "Achievements",
    "skills": "Skills",
    "leadership": "Leadership and Volunteering",
    "education": "Education",
    "certificates": "Certificate of Completion",
    "references": "References",
}

DEFAULT_SECTION_ORDER = list(SECTION_TITLES)
KNOWN_SECTIONS = frozenset(DEFAULT_SECTION_ORDER)

# Section id -> document field it renders
SECTION_FIELDS = {
    "summary": "summary",
    "projects": "projects",
    "achievements": "achievements",
    "skills": "skills",
    "leadership": "leadershipAndVolunteering",
    "education": "education",
    "certificates": "certificates",
    "references": "references",
}

DEFAULT_RESUME = {
    "personal": {
        "name": "Alex Doe",
        "email": "alex.doe@example.com",
        "phone": "123-456-7890",
        "linkedin": "www.linkedin.com/in/alex-doe",
        "location": "New York, NY"
    },
    "styling": {
        "fontFamily": "Inter",
        "fontSize": "0.9rem",
        "lineHeight": "1.5",
        "textAlign": "left"
    },
    "summary": (
        "Innovative and results-driven Software Engineer with 5+ years of experience "
        "in developing and scaling web applications. Proficient in JavaScript, React, "
        "and Node.js with a proven ability to lead projects from conception to completion. "
        "Passionate about creating efficient, user-friendly solutions and collaborating "
        "with cross-functional teams to achieve business goals."
    ),
    "projects": [
        {
            "name": "AI Resume Builder",
            "projectType": "Self-Project",
            "role": "Lead Developer",
            "period": "2023-Present",
            "description": "A personal portfolio website to showcase my projects and skills, built with Next.js and deployed on Vercel.",
            "preview": "https://my-resume-builder.com"
        }
    ],
    "achievements": [
        {
            "achievement": "Innovator of the Year Award",
            "event": "Annual Company Awards",
            "date": "2023",
            "description": "Awarded for developing a new feature that increased user engagement by 20%."
        }
    ],
    "leadershipAndVolunteering": [
        {
            "organization": "Tech-for-Good",
            "role": "Mentor",
            "date": "2022-Present",
            "description": "Mentored junior developers from underrepresented backgrounds, helping them to start their careers in tech."
        }
    ],
    "education": [
        {
            "degree": "Bachelor of Science in Computer Science",
            "school": "University of Technology",
            "location": "New York, NY",
            "graduationDate": "May 2019",
            "cgpa": "3.8/4.0"
        }
    ],
    "skills": {
        "technicalSkills": "JavaScript, TypeScript, React, Next.js, Node.js, Express, PostgreSQL, Docker, Git, Agile Methodologies",
        "softSkills": "Communication, Teamwork, Problem Solving, Project Management",
        "language": "English (Native), Spanish (Conversational)"
    },
    "certificates": [
        {
            "name": "Certified Kubernetes Application Developer (CKAD)",
            "issuingOrganization": "The Linux Foundation",
            "date": "2022"
        }
    ],
    "references": [
        {
            "name": "Jane Smith",
            "contact": "jane.smith@example.com",
            "relation": "Former Manager at Tech Solutions Inc."
        }
    ]
}


def default_document() -> ResumeDocument:
    """Placeholder resume. Every call issues fresh entry ids."""
    return ResumeDocument.model_validate(DEFAULT_RESUME)


def default_order() -> List[str]:
    return list(DEFAULT_SECTION_ORDER)


# --- 5. Validation ---
@dataclass(frozen=True)
class FieldError:
    path: str
    message: str


@dataclass
class ValidationResult:
    document: ResumeDocument
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def messages_for(self, path: str) -> List[str]:
        return [e.message for e in self.errors if e.path == path]


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def validate_document(document: ResumeDocument) -> ValidationResult:
    """
    Checks the summary and every entry's required fields.
    Errors are addressed by path, e.g. `projects[0].description`.
    The document is not modified.
    """
    errors = []
    if _is_blank(document.summary):
        errors.append(FieldError("summary", "A summary is required"))

    for list_name in LIST_FIELDS:
        for index, entry in enumerate(getattr(document, list_name)):
            for field_name, message in entry.REQUIRED_FIELDS.items():
                if _is_blank(getattr(entry, field_name)):
                    errors.append(FieldError(f"{list_name}[{index}].{field_name}", message))

    return ValidationResult(document=document, errors=errors)
