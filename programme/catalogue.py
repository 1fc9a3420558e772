"""
Subject types, default planner parameters and the predefined subject lists
offered when building a course programme.
"""

from typing import List

DEFAULT_GROUPS: List[str] = ["A", "B", "C", "D"]

DEFAULT_STATIONS = 4
DEFAULT_TIME_SLOTS = 4
DEFAULT_SLOT_MINUTES = 30
DEFAULT_WORKSHOP_MINUTES = 40
DEFAULT_ROTATIONS = 4

# Subject types
SESSION = "session"
WORKSHOP = "workshop"
PRACTICAL = "practical"
ASSESSMENT = "assessment"
SCENARIO_PRACTICE = "scenario-practice"
PRACTICAL_SESSION = "practical-session"
BREAK = "break"
LUNCH = "lunch"

SUBJECT_TYPES = [
    SESSION, WORKSHOP, PRACTICAL, ASSESSMENT,
    SCENARIO_PRACTICE, PRACTICAL_SESSION, BREAK, LUNCH,
]

# Types whose groups rotate around stations slot by slot
STATION_TYPES = {SCENARIO_PRACTICE, PRACTICAL_SESSION}

# Fixed names for types the form does not let the user type
FIXED_NAMES = {
    SCENARIO_PRACTICE: "Scenario Practice",
    BREAK: "Break",
    LUNCH: "Lunch",
}

PREDEFINED_WORKSHOP_SUBJECTS = [
    "Fluids and Transfusion",
    "Lumbar Puncture and CSF Analysis",
    "Advanced Arrhythmia Management",
    "Imaging and Radiology",
]

PREDEFINED_SESSION_SUBJECTS = [
    "Registration / Meeting for Faculty",
    "Welcome and Introductions – Why IMPACT?",
    "Faculty Demonstration followed by Initial Assessment",
    "Triage and Resource Management",
    "The Breathless Patient",
    "Shock",
    "Respiratory Support",
    "Chest Pain",
    "Acute Kidney Injury",
    "Neurological Emergencies",
    "Gastrointestinal Emergencies",
    "Sugar & Salt",
    "Retests / Mentor Feedback",
    "Summary and Close",
    "Break",
    "Lunch",
]

PREDEFINED_PRACTICAL_SUBJECTS = [
    "Central Venous Cannulation",
    "Thoracocentesis",
    "Lumbar Puncture",
    "Arterial Line Insertion",
    "Chest Drain Insertion",
    "Endotracheal Intubation",
    "Supraglottic Airway Insertion",
    "Needle Cricothyroidotomy",
    "Pleural Aspiration",
    "Abdominal Paracentesis",
    "Joint Aspiration",
    "Pericardiocentesis",
    "Nasogastric Tube Insertion",
    "Urinary Catheterisation",
    "Peripheral IV Cannulation",
    "Blood Gas Sampling",
]
