from models.question_schema import Question, QuestionSchedule

# The answer to "name" personalizes the conversation (see NAME_KEY).
BIO_QUESTIONS: QuestionSchedule = (
    Question(
        key="name",
        prompt="What's your full name?",
        label="Full Name",
        placeholder="John Doe",
        multiline=False,
    ),
    Question(
        key="skills",
        prompt="What are your key skills and areas of expertise?",
        label="Key Skills",
        placeholder="List your main skills and expertise...",
    ),
    Question(
        key="experience",
        prompt="Tell me about your professional experience.",
        label="Professional Experience",
        placeholder="Describe your work experience...",
    ),
    Question(
        key="achievements",
        prompt="What are some of your notable achievements?",
        label="Notable Achievements",
        placeholder="Highlight your key accomplishments...",
    ),
)
