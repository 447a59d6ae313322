"""
api/sample_assessment.py: built-in sample assessment (used when no ASSESSMENTS_FILE is set)
"""

from assessment_take.models.question_model import (
    Assessment,
    EssayQuestion,
    MultipleChoiceQuestion,
    Option,
    PracticalQuestion,
)

SAMPLE_ASSESSMENTS: list[Assessment] = [
    Assessment(
        id="sample-first-aid",
        title="First aid fundamentals",
        description="Module 1 theory check",
        duration_minutes=30,
        total_points=30,
        questions=[
            MultipleChoiceQuestion(
                id="q1",
                text="What is the first step when arriving at an accident scene?",
                points=10,
                options=[
                    Option(id="q1a", text="Start chest compressions"),
                    Option(id="q1b", text="Check that the scene is safe", is_correct=True),
                    Option(id="q1c", text="Move the victim"),
                    Option(id="q1d", text="Give the victim water"),
                ],
            ),
            EssayQuestion(
                id="q2",
                text="Describe how to control severe external bleeding.",
                points=15,
            ),
            PracticalQuestion(
                id="q3",
                text="Demonstrate the recovery position on a partner.",
                points=5,
            ),
        ],
    ),
    Assessment(
        id="sample-rescue",
        title="Rescue techniques",
        description="Short quiz",
        duration_minutes=10,
        total_points=10,
        questions=[
            MultipleChoiceQuestion(
                id="r1",
                text="Which knot is used to secure a rescue line around a person?",
                points=5,
                options=[
                    Option(id="r1a", text="Bowline", is_correct=True),
                    Option(id="r1b", text="Square knot"),
                    Option(id="r1c", text="Clove hitch"),
                ],
            ),
            MultipleChoiceQuestion(
                id="r2",
                text="What should you do before entering a confined space?",
                points=5,
                options=[
                    Option(id="r2a", text="Test the atmosphere", is_correct=True),
                    Option(id="r2b", text="Enter quickly"),
                ],
            ),
        ],
    ),
]
