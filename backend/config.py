"""
Configuration module for the candidate rating engine.
Holds the keyword tables used by the rating engine and the BambooHR
connection settings. Defaults are built in; a YAML file may override them.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional
import yaml
import os


class EducationLevel(BaseModel):
    """One row of the ordered education table."""
    keywords: List[str]
    score: int = Field(ge=0, le=10)
    label: str


class Institution(BaseModel):
    """Prestigious institution with its alias keywords."""
    name: str
    keywords: List[str]


class InstitutionBonus(BaseModel):
    """Points added to the education score for a known institution."""
    prestigious: int = 2
    recognised: int = 1


class ExperienceStep(BaseModel):
    """Minimum years required to earn a score."""
    min_years: int
    score: int = Field(ge=0, le=10)


class ScoringWeights(BaseModel):
    """Weights used to blend education and experience into the overall score."""
    education: float = 0.5
    experience: float = 0.5


class QuestionRoutes(BaseModel):
    """Question keywords that route an answer to an extractor."""
    education: List[str] = Field(default_factory=lambda: [
        "education", "qualification", "degree", "study", "level",
    ])
    institution: List[str] = Field(default_factory=lambda: [
        "university", "college", "institution", "school", "where", "which",
    ])
    experience: List[str] = Field(default_factory=lambda: [
        "experience", "years", "work history", "background",
    ])


class BambooHRSettings(BaseModel):
    """Connection settings for the BambooHR API."""
    api_key: Optional[str] = None
    subdomain: Optional[str] = None
    timeout: int = 20

    @classmethod
    def from_env(cls) -> "BambooHRSettings":
        return cls(
            api_key=os.environ.get("BAMBOO_API_KEY"),
            subdomain=os.environ.get("BAMBOO_SUBDOMAIN"),
        )


# Order matters: the first row with a matching keyword wins.
DEFAULT_EDUCATION_LEVELS = [
    EducationLevel(
        keywords=["phd", "ph.d", "doctorate", "doctoral", "doctor of"],
        score=10, label="PhD/Doctorate",
    ),
    EducationLevel(
        keywords=["ca(sa)", "ca (sa)", "chartered accountant", "cpa", "c.p.a", "acca"],
        score=9, label="Professional (CA/CPA)",
    ),
    EducationLevel(
        keywords=["master", "masters", "mba", "m.b.a", "msc", "m.sc",
                  "mcom", "m.com", "ma", "m.a"],
        score=8, label="Masters",
    ),
    EducationLevel(
        keywords=["honour", "honors", "hons", "b.com hons", "bcom hons",
                  "postgraduate diploma", "pgdip"],
        score=7, label="Honours/Postgrad Diploma",
    ),
    EducationLevel(
        keywords=["bachelor", "bachelors", "bcom", "b.com", "bsc", "b.sc", "ba",
                  "b.a", "bba", "b.b.a", "llb", "l.l.b", "btech", "b.tech",
                  "degree", "undergraduate"],
        score=6, label="Bachelors Degree",
    ),
    EducationLevel(keywords=["associate", "associates"], score=5, label="Associates"),
    EducationLevel(
        keywords=["national diploma", "n.dip", "ndip", "diploma"],
        score=4, label="Diploma",
    ),
    EducationLevel(
        keywords=["certificate", "cert", "certification"],
        score=3, label="Certificate",
    ),
    EducationLevel(
        keywords=["matric", "matriculation", "high school", "secondary", "ged",
                  "grade 12", "nsc", "national senior certificate"],
        score=2, label="Matric/High School",
    ),
]

DEFAULT_INSTITUTIONS = [
    Institution(name="Harvard University", keywords=["harvard"]),
    Institution(name="Stanford University", keywords=["stanford"]),
    Institution(name="MIT", keywords=["massachusetts institute of technology", "mit"]),
    Institution(name="Yale University", keywords=["yale"]),
    Institution(name="Princeton University", keywords=["princeton"]),
    Institution(name="Columbia University", keywords=["columbia"]),
    Institution(name="University of Oxford", keywords=["oxford"]),
    Institution(name="University of Cambridge", keywords=["cambridge"]),
    Institution(name="UC Berkeley", keywords=["berkeley"]),
    Institution(name="Caltech", keywords=["caltech"]),
    Institution(name="University of Chicago", keywords=["chicago"]),
    Institution(name="University of Pennsylvania", keywords=["upenn"]),
    Institution(name="Cornell University", keywords=["cornell"]),
    Institution(name="Duke University", keywords=["duke"]),
    Institution(name="Northwestern University", keywords=["northwestern"]),
    Institution(name="Johns Hopkins University", keywords=["johns hopkins"]),
    Institution(name="UCLA", keywords=["ucla"]),
    Institution(name="NYU", keywords=["nyu"]),
    Institution(name="University of Michigan", keywords=["michigan"]),
    Institution(name="Carnegie Mellon University", keywords=["carnegie mellon"]),
]

DEFAULT_EXPERIENCE_STEPS = [
    ExperienceStep(min_years=15, score=10),
    ExperienceStep(min_years=10, score=9),
    ExperienceStep(min_years=7, score=8),
    ExperienceStep(min_years=5, score=7),
    ExperienceStep(min_years=3, score=5),
    ExperienceStep(min_years=2, score=4),
    ExperienceStep(min_years=1, score=3),
]

DEFAULT_NUMBER_WORDS = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
    "eleven": 11, "twelve": 12, "fifteen": 15, "twenty": 20,
}


class RatingConfig(BaseModel):
    """Tables and weights used by the rating engine."""
    education_levels: List[EducationLevel] = Field(
        default_factory=lambda: list(DEFAULT_EDUCATION_LEVELS)
    )
    institutions: List[Institution] = Field(
        default_factory=lambda: list(DEFAULT_INSTITUTIONS)
    )
    institution_bonus: InstitutionBonus = Field(default_factory=InstitutionBonus)
    experience_steps: List[ExperienceStep] = Field(
        default_factory=lambda: list(DEFAULT_EXPERIENCE_STEPS)
    )
    # Score for a known but below-threshold year count (including 0)
    experience_floor: int = 1
    number_words: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_NUMBER_WORDS)
    )
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    routes: QuestionRoutes = Field(default_factory=QuestionRoutes)

    model_config = {"frozen": True}

    @field_validator("experience_steps")
    @classmethod
    def _sort_steps(cls, steps: List[ExperienceStep]) -> List[ExperienceStep]:
        return sorted(steps, key=lambda step: step.min_years, reverse=True)


class Config(BaseModel):
    """Main configuration model."""
    rating: RatingConfig = Field(default_factory=RatingConfig)
    bamboohr: BambooHRSettings = Field(default_factory=BambooHRSettings.from_env)


def default_config() -> Config:
    """Return the built-in configuration without reading any file."""
    return Config()


def load_config(path: str = "config.yaml") -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file (default: config.yaml)

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML syntax is invalid
        ValueError: If the file is empty or the config structure is invalid
    """
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Configuration file not found: {path}\n"
            f"Please copy config.example.yaml to {path} and customize it."
        )

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(
            f"Invalid YAML syntax in {path}: {e}"
        )

    if data is None:
        raise ValueError(f"Configuration file {path} is empty")

    try:
        config = Config(**data)
    except Exception as e:
        raise ValueError(
            f"Invalid configuration structure in {path}: {e}\n"
            f"Please check config.example.yaml for the correct format."
        )

    # Environment variables fill in credentials the file leaves out
    if config.bamboohr.api_key is None or config.bamboohr.subdomain is None:
        env = BambooHRSettings.from_env()
        config.bamboohr.api_key = config.bamboohr.api_key or env.api_key
        config.bamboohr.subdomain = config.bamboohr.subdomain or env.subdomain

    return config
