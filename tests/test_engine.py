import pytest

from config import InstitutionBonus, RatingConfig, ScoringWeights
from rating import Analysis, EducationSignal, InstitutionSignal, RatingCalculator, RatingEngine


@pytest.fixture
def engine():
    return RatingEngine()


def qa(question, answer):
    return {"question": {"label": question}, "answer": {"label": answer}}


def test_prestigious_institution_bonus(engine):
    result = engine.rate([qa("Tell us about your education", "I have a Bachelor's degree from Harvard")])
    assert result.education_score == 8
    assert result.education_level == "Bachelors Degree"
    assert "Harvard" in result.institution
    assert result.overall == 8
    assert result.confidence == "medium"


def test_experience_only(engine):
    result = engine.rate([qa("Years of experience?", "12")])
    assert result.overall == 9
    assert result.experience_score == 9
    assert result.education_score == 0
    assert result.confidence == "medium"
    assert result.data_source == ["questionsAndAnswers:experience"]


def test_no_data(engine):
    result = engine.rate([])
    assert result.overall == 0
    assert result.confidence == "low"
    assert result.data_source == []
    assert result.education_level is None
    assert result.years_experience is None


def test_both_categories_blend(engine):
    result = engine.rate([
        qa("Highest degree", "PhD"),
        qa("Years of experience", "4"),
    ])
    assert result.education_score == 10
    assert result.experience_score == 5
    assert result.overall == 7.5
    assert result.confidence == "high"


def test_education_score_is_capped(engine):
    result = engine.rate([
        qa("Highest degree", "PhD"),
        qa("Which university?", "Harvard"),
    ])
    assert result.education_score == 10


def test_recognised_institution_bonus(engine):
    result = engine.rate([
        qa("Highest degree", "Bachelor of Commerce"),
        qa("Which university?", "Rhodes University"),
    ])
    assert result.education_score == 7
    assert result.institution == "Rhodes University"


def test_institution_alone_does_not_raise_confidence(engine):
    result = engine.rate([qa("Which university did you attend?", "Rhodes University")])
    assert result.education_score == 1
    assert result.overall == 0
    assert result.confidence == "low"


def test_data_source_has_no_duplicates(engine):
    result = engine.rate([
        qa("Years of experience", "3"),
        qa("Work experience", "5 years"),
        qa("Background", "ten years"),
    ])
    assert result.data_source == ["questionsAndAnswers:experience"]
    assert result.years_experience == 10


@pytest.mark.parametrize("years,expected", [
    (0, 1),
    (1, 3),
    (2, 4),
    (3, 5),
    (4, 5),
    (5, 7),
    (7, 8),
    (10, 9),
    (14, 9),
    (15, 10),
    (40, 10),
])
def test_experience_steps(years, expected):
    assert RatingCalculator().score_experience(years) == expected


def test_calculate_is_repeatable():
    analysis = Analysis(
        education=EducationSignal(level="Masters", score=8),
        institution=InstitutionSignal(name="UCLA", is_prestigious=True),
        experience=6,
        sources=("questionsAndAnswers:education", "resumeText:experience"),
    )
    calculator = RatingCalculator()
    assert calculator.calculate(analysis) == calculator.calculate(analysis)


def test_to_dict_shape(engine):
    result = engine.rate([
        qa("Highest degree", "Masters"),
        qa("Years of experience", "6"),
    ])
    assert result.to_dict() == {
        "overall": 7.5,
        "breakdown": {
            "education": {"score": 8, "level": "Masters", "institution": None},
            "experience": {"score": 7, "years": 6},
        },
        "confidence": "high",
        "dataSource": [
            "questionsAndAnswers:education",
            "questionsAndAnswers:experience",
        ],
    }


def test_configured_bonus_and_weights():
    config = RatingConfig(
        institution_bonus=InstitutionBonus(prestigious=1, recognised=0),
        weights=ScoringWeights(education=0.4, experience=0.6),
    )
    engine = RatingEngine(config)
    result = engine.rate([
        qa("Tell us about your education", "I have a Bachelor's degree from Harvard"),
        qa("Years of experience", "15"),
    ])
    assert result.education_score == 7
    assert result.overall == 8.8
