# Static educational content served by GET /api/learn
LEARN_CONTENT = {
    "topics": [
        {
            "id": 1,
            "title": "Understanding Misinformation",
            "description": "Learn how to identify and combat false information",
            "cards": [
                {
                    "title": "Types of Misinformation",
                    "content": "Misinformation can be classified into several categories: disinformation (intentionally false), misinformation (unintentionally false), and malinformation (true information used to harm).",
                    "quiz": {
                        "question": "What is the difference between disinformation and misinformation?",
                        "options": [
                            "Disinformation is always false, misinformation is sometimes true",
                            "Disinformation is intentional, misinformation is unintentional",
                            "There is no difference",
                            "Disinformation is digital, misinformation is analog",
                        ],
                        "correct": 1,
                    },
                },
                {
                    "title": "Source Verification",
                    "content": "Always check the source of information. Look for author credentials, publication date, and whether the source has a history of accuracy.",
                    "quiz": {
                        "question": "What should you check when verifying a source?",
                        "options": [
                            "Only the publication date",
                            "Author credentials and publication history",
                            "Only the website design",
                            "The number of social media shares",
                        ],
                        "correct": 1,
                    },
                },
            ],
        },
        {
            "id": 2,
            "title": "Deepfake Detection",
            "description": "Learn to identify manipulated media content",
            "cards": [
                {
                    "title": "Visual Cues",
                    "content": "Look for inconsistencies in facial features, lighting, shadows, and reflections. Deepfakes often have subtle artifacts around the face and eyes.",
                    "quiz": {
                        "question": "What are common signs of deepfake videos?",
                        "options": [
                            "Perfect lighting and shadows",
                            "Inconsistencies in facial features",
                            "High video quality",
                            "Professional editing",
                        ],
                        "correct": 1,
                    },
                },
            ],
        },
    ]
}
