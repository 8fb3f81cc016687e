from app.core.models import ActionType, AgentAction

BASE_INSTRUCTION = (
    "You are a world-class AI Research Assistant. Your current action mode is {mode}. "
    "Always cite your sources if provided."
)

MODE_INSTRUCTIONS: dict[ActionType, str] = {
    ActionType.ANSWER: (
        "Be concise and factual. Answer the question directly using the retrieved context, "
        "and say so plainly when the context does not contain the answer."
    ),
    ActionType.SUMMARIZE: (
        "Condense the information into key points. Keep only what matters for the user's "
        "request and drop repetition and minor detail."
    ),
    ActionType.CATEGORIZE: (
        "Organize the information into logical themes. Give each theme a short heading "
        "followed by bullet points of the findings that belong to it."
    ),
    ActionType.REPORT: (
        "Create a comprehensive research report with four sections: Introduction, "
        "Key Findings, Analysis, Conclusion."
    ),
}


def build_system_prompt(action: AgentAction) -> str:
    return f"{BASE_INSTRUCTION.format(mode=action.type.value)}\n\n{MODE_INSTRUCTIONS[action.type]}"


def build_prompt(question: str, action: AgentAction, context: str) -> str:
    return f"""Action Type: {action.type.value}
Reasoning: {action.reasoning}
Retrieved Context:
---
{context}
---
User Query: {question}"""
