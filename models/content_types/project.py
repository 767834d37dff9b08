from models.question_schema import Question, QuestionSchedule

PROJECT_QUESTIONS: QuestionSchedule = (
    Question(
        key="projectName",
        prompt="What's the name of your project?",
        label="Project Name",
        placeholder="My Awesome Project",
        multiline=False,
    ),
    Question(
        key="objective",
        prompt="What was the main objective of this project?",
        label="Project Objective",
        placeholder="What was the goal of this project?",
    ),
    Question(
        key="technologies",
        prompt="What technologies and tools did you use?",
        label="Technologies Used",
        placeholder="List the technologies and tools...",
    ),
    Question(
        key="achievements",
        prompt="What were the key achievements in this project?",
        label="Key Achievements",
        placeholder="What did you accomplish?",
    ),
    Question(
        key="impact",
        prompt="What impact did your project have?",
        label="Impact & Results",
        placeholder="What was the impact of your work?",
    ),
)
