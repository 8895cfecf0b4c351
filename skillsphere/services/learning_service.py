from __future__ import annotations

import copy
import random
from typing import Any

from skillsphere.ai.types import CompletionClient
from skillsphere.schemas.learning import (
    InterviewFeedback,
    InterviewFeedbackRequest,
    LearningGuide,
    LearningGuideRequest,
    Quiz,
    QuizRequest,
)
from skillsphere.services.completion import run_json_completion
from skillsphere.services.outcome import Outcome

DEFAULT_INTERVIEW_TYPE = "behavioral"

INTERVIEW_QUESTIONS: dict[str, list[str]] = {
    "behavioral": [
        "Tell me about a time when you faced a challenging situation at work.",
        "Describe a project where you had to work with a difficult team member.",
        "How do you handle tight deadlines and pressure?",
    ],
    "technical": [
        "Explain the difference between REST and GraphQL.",
        "What is the time complexity of common sorting algorithms?",
        "How would you optimize a slow database query?",
    ],
    "coding": [
        "Write a function to reverse a linked list.",
        "Implement a function to find the longest palindrome in a string.",
        "Design a rate limiter for an API.",
    ],
}

DEFAULT_QUIZ_QUESTIONS: list[dict[str, Any]] = [
    {
        "id": 1,
        "question": "What does 'HTTP' stand for in web development?",
        "options": [
            "HyperText Transfer Protocol",
            "High Transfer Text Protocol",
            "HyperText Transmission Process",
            "Hyperlink Transfer Technology",
        ],
        "answer": "HyperText Transfer Protocol",
    },
    {
        "id": 2,
        "question": "Which data structure uses LIFO (Last In First Out)?",
        "options": ["Queue", "Array", "Stack", "Linked List"],
        "answer": "Stack",
    },
    {
        "id": 3,
        "question": "What is the primary function of a React 'useEffect' hook?",
        "options": ["To manage state", "To perform side effects", "To create context", "To optimize rendering"],
        "answer": "To perform side effects",
    },
    {
        "id": 4,
        "question": "In Python, which keyword is used to define a function?",
        "options": ["func", "def", "definition", "function"],
        "answer": "def",
    },
    {
        "id": 5,
        "question": "What is the time complexity of binary search?",
        "options": ["O(n)", "O(n^2)", "O(log n)", "O(1)"],
        "answer": "O(log n)",
    },
]


def learning_guide_fallback() -> dict[str, Any]:
    return {
        "skillGaps": ["React", "Node.js", "System Design"],
        "courses": [
            {"id": "1", "title": "React Complete Guide", "platform": "Udemy", "duration": "40 hours", "level": "Intermediate"},
            {"id": "2", "title": "Node.js Masterclass", "platform": "Coursera", "duration": "30 hours", "level": "Intermediate"},
            {"id": "3", "title": "System Design Fundamentals", "platform": "educative.io", "duration": "20 hours", "level": "Advanced"},
        ],
        "certifications": ["AWS Certified Developer", "Meta React Certification"],
    }


def build_learning_guide(client: CompletionClient, payload: LearningGuideRequest) -> Outcome:
    user_prompt = f"""Analyze skill gaps for someone wanting to become a {payload.target_role}.
Current skills: {payload.current_skills or "Not specified"}

Provide JSON with:
1. skillGaps: Array of missing skills
2. courses: Array of 4-6 courses with id, title, platform, duration, level
3. certifications: Array of recommended certifications

Format as valid JSON only."""
    return run_json_completion(
        client,
        endpoint="learning-guide",
        system_prompt="You are a learning advisor. Respond only with valid JSON.",
        user_prompt=user_prompt,
        fallback=learning_guide_fallback(),
        response_model=LearningGuide,
    )


def pick_interview_question(interview_type: str | None, rng: random.Random | None = None) -> str:
    """Unknown types get a behavioral question."""
    questions = INTERVIEW_QUESTIONS.get((interview_type or "").strip().lower(), INTERVIEW_QUESTIONS[DEFAULT_INTERVIEW_TYPE])
    return (rng or random).choice(questions)


def interview_feedback_fallback() -> dict[str, Any]:
    return {
        "score": 7,
        "strengths": ["Clear communication", "Good structure"],
        "improvements": ["Add more specific examples", "Quantify your impact"],
        "suggestedAnswer": "Consider using the STAR method: Situation, Task, Action, Result.",
    }


def evaluate_interview_answer(client: CompletionClient, payload: InterviewFeedbackRequest) -> Outcome:
    user_prompt = f"""Evaluate this interview response:
Question: {payload.question}
Answer: {payload.transcript or "No transcript available"}
Type: {payload.type}

Provide JSON with:
1. score: Number 1-10
2. strengths: Array of 2-3 positive points
3. improvements: Array of 2-3 areas to improve
4. suggestedAnswer: A better way to answer

Format as valid JSON only."""
    return run_json_completion(
        client,
        endpoint="interview-feedback",
        system_prompt="You are an interview coach. Respond only with valid JSON.",
        user_prompt=user_prompt,
        fallback=interview_feedback_fallback(),
        response_model=InterviewFeedback,
    )


def quiz_fallback(payload: QuizRequest) -> dict[str, Any]:
    return {"topic": payload.topic, "questions": copy.deepcopy(DEFAULT_QUIZ_QUESTIONS)}


def generate_quiz(client: CompletionClient, payload: QuizRequest) -> Outcome:
    user_prompt = f"""Create a {payload.difficulty} multiple-choice quiz about {payload.topic}.

Provide JSON with:
1. topic: The quiz topic
2. questions: Array of exactly {payload.count} objects with id (number starting at 1), question, options (array of 4 strings), answer (must equal one of the options)

Format as valid JSON only."""
    return run_json_completion(
        client,
        endpoint="generate-quiz",
        system_prompt="You are a quiz master for technical career skills. Respond only with valid JSON.",
        user_prompt=user_prompt,
        fallback=quiz_fallback(payload),
        response_model=Quiz,
    )
