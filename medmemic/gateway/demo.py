# FILE: medmemic/gateway/demo.py

from medmemic.core.models import Role
from medmemic.gateway.memory import MemoryGateway

DEMO_PASSWORD = "demo1234"

DEMO_ACCOUNTS = {
    Role.STUDENT: ("etudiant@medmemic.demo", "Yasmine Alaoui"),
    Role.PROFESSOR: ("professeur@medmemic.demo", "Pr. Karim Bennani"),
    Role.ADMIN: ("admin@medmemic.demo", "Équipe MedMemic"),
}

DEMO_SCENARIOS = [
    {
        "title": "Fièvre chez le nourrisson de 2 mois",
        "description": "Nourrisson fébrile à 38.9°C, difficultés alimentaires depuis la veille.",
        "difficulty": "Débutant",
        "specialty": "Pédiatrie Générale",
        "duration_minutes": 15,
    },
    {
        "title": "Bronchiolite sévère",
        "description": "Nourrisson de 4 mois, tirage intercostal, SpO2 à 89%.",
        "difficulty": "Intermédiaire",
        "specialty": "Urgences Pédiatriques",
        "duration_minutes": 20,
    },
    {
        "title": "Nourrisson apathique",
        "description": "\"Il est tout mou et il ne se réveille pas.\" Fréquence cardiaque à 190 bpm.",
        "difficulty": "Avancé",
        "specialty": "Urgences Pédiatriques",
        "duration_minutes": 25,
    },
]


def build_demo_gateway():
    """MemoryGateway pre-filled with one account per role and a small case library."""
    gateway = MemoryGateway()
    users = {}
    for role, (email, name) in DEMO_ACCOUNTS.items():
        user = gateway.auth.add_account(email, DEMO_PASSWORD, {"full_name": name, "role": role.value})
        users[role] = user
        gateway.seed("user_profiles", {
            "user_id": user.id,
            "full_name": name,
            "email": email,
            "role": role.value,
        })

    gateway.seed("user_progress", {
        "user_id": users[Role.STUDENT].id,
        "specialty": "pediatrics",
        "completed_sessions": 3,
        "avg_accuracy": 80,
        "current_streak": 2,
    })

    scenarios = gateway.seed("scenarios", *DEMO_SCENARIOS)
    for scenario, score in zip(scenarios, (72, 85, 64)):
        gateway.seed("scenario_sessions", {
            "user_id": users[Role.STUDENT].id,
            "scenario_id": scenario["id"],
            "accuracy_score": score,
        })
    gateway.seed("scenario_courses", {
        "scenario_id": scenarios[1]["id"],
        "title": "Score de gravité de la bronchiolite",
        "description": "Fiche de synthèse sur les critères d'hospitalisation.",
        "content_type": "pdf",
        "status": "pending",
    })
    return gateway
