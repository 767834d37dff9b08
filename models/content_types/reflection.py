from models.question_schema import Question, QuestionSchedule

REFLECTION_QUESTIONS: QuestionSchedule = (
    Question(
        key="topic",
        prompt="What topic did you learn about?",
        label="Learning Topic",
        placeholder="Machine Learning Fundamentals",
        multiline=False,
    ),
    Question(
        key="context",
        prompt="Where and how did you learn this?",
        label="Learning Context",
        placeholder="Where and how did you learn this?",
    ),
    Question(
        key="keyLearnings",
        prompt="What were your main takeaways?",
        label="Key Learnings",
        placeholder="What were your main takeaways?",
    ),
    Question(
        key="challenges",
        prompt="What challenges did you face?",
        label="Challenges Faced",
        placeholder="What difficulties did you encounter?",
    ),
    Question(
        key="application",
        prompt="How will you apply this knowledge in the future?",
        label="Future Application",
        placeholder="How will you apply this knowledge?",
    ),
)
