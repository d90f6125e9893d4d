# FILE: medmemic/ui/content.py

# Marketing copy for the landing page

NAV_LINKS = [
    {"label": "Problème", "anchor": "problem"},
    {"label": "Solution", "anchor": "solution"},
    {"label": "Fonctionnalités", "anchor": "features"},
    {"label": "Public", "anchor": "audience"},
    {"label": "FAQ", "anchor": "faq"},
]

HERO = {
    "badge": "500 places beta disponibles",
    "title": "Deviens le médecin dont un enfant a besoin.",
    "subtitle": (
        "Simulation pédiatrique interactive. Entraîne-toi sur des cas virtuels, "
        "commets tes erreurs ici, et sois prêt quand la réalité frappe."
    ),
    "case": {
        "tag": "Urgence Vitale",
        "patient": "Nourrisson, 4 mois.",
        "motive": 'Motif : "Il est tout mou et il ne se réveille pas." Parents très anxieux. Température 36.2°C.',
        "vitals": "Fréquence Cardiaque: 190 bpm",
    },
}

PROBLEM_ITEMS = [
    {"text": "La peur de bloquer devant un nourrisson en détresse.", "icon": "⚠️"},
    {"text": "Trop de théorie, presque aucune exposition réelle aux cas pédiatriques.", "icon": "📚"},
    {"text": "Services saturés = supervision limitée & feedback quasi absent.", "icon": "👥"},
    {"text": "Aucun espace sécurisé pour tester, se tromper et comprendre avant d’agir.", "icon": "🛡️"},
]

FEATURES = [
    {
        "title": "Cas cliniques pédiatriques interactifs",
        "description": "Prends en charge des enfants de tout âge. Décide face à une fièvre inquiétante, une bronchiolite, une allergie sévère, une déshydratation… avec le réalisme du terrain.",
        "icon": "🩺",
    },
    {
        "title": "Patients virtuels & Feedback pédagogique",
        "description": "Chaque patient virtuel évolue selon tes décisions. Obtiens un retour immédiat et fondé sur le raisonnement clinique pédiatrique réel.",
        "icon": "🤖",
    },
    {
        "title": "Safe-Failure Learning",
        "description": "Le seul endroit où tu peux “te tromper” en pédiatrie… sans conséquence. Et où chaque erreur devient une compétence.",
        "icon": "✅",
    },
    {
        "title": "Gamification clinique",
        "description": "Loin du jeu. Près de la motivation. Badges cliniques, suivi de compétences, progression visible et défis pour rester régulier.",
        "icon": "🏆",
    },
    {
        "title": "Modules 100% pédiatrie",
        "description": "Urgences pédiatriques, nourrisson, néonat, pédiatrie générale : tout ce que tu verras — ou redouteras — en stage.",
        "icon": "🧩",
    },
    {
        "title": "Mode solo & collaboratif (roadmap)",
        "description": "Entraîne-toi seul ou discute un cas avec un interne ou résident. Comme un débrief de garde, mais accessible 24/7.",
        "icon": "👥",
    },
]

AUDIENCE_SEGMENTS = [
    {"title": "Externes", "description": "Pour ne plus arriver en stage avec la sensation d’être “là pour la première fois”.", "icon": "🎓"},
    {"title": "Internes", "description": "Pour répéter les situations fréquentes et apprendre à gérer la pression de la garde.", "icon": "🩺"},
    {"title": "Résidents", "description": "Pour affiner le raisonnement et t’entraîner à des situations complexes ou rares… avant qu’elles n’arrivent en vrai.", "icon": "📊"},
]

PRICING = {
    "badge": "🚀 Accès Bêta Limitée",
    "title": "Sécurisez votre place.",
    "subtitle": "Rejoignez les 500 premiers étudiants qui transformeront leur pratique médicale. Accès anticipé + tarif fondateur à vie.",
    "benefits": ["500 places seulement", "Accès anticipé", "Avantages à vie"],
    "placeholder": "votre-email@univ-medecine.fr",
    "cta": "Réserver mon accès",
    "note": "Pas de spam. Désinscription en 1 clic.",
}

FAQ_ITEMS = [
    {
        "question": "MedMemic remplace-t-il les stages ?",
        "answer": "Non. MedMemic te prépare pour que tu profites mieux de tes stages et que tu arrives avec plus d’expérience virtuelle que la plupart des étudiants.",
    },
    {
        "question": "Les cas pédiatriques sont-ils validés par des médecins ?",
        "answer": "Oui, ils sont construits et relus avec des professeurs en pédiatrie.",
    },
    {
        "question": "Est-ce adapté à mon niveau ?",
        "answer": "Totalement. Les cas vont du simple (fièvre, toux) au critique (détresse respiratoire, nourrisson apathique).",
    },
    {
        "question": "Sur quels appareils fonctionne MedMemic ?",
        "answer": "Mobile, tablette, ordinateur. Aucune installation nécessaire.",
    },
    {
        "question": "Vous ouvrez où ?",
        "answer": "D’abord au Maroc, puis progressivement aux autres régions francophones.",
    },
]
