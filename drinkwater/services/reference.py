"""
Choice lists served to clients for onboarding and profile editing.
Order is display order.
"""
from typing import Iterable

GENDER_OPTIONS: list[dict[str, str]] = [
    {"value": "male",                      "label": "Male"},
    {"value": "female",                    "label": "Female"},
    {"value": "trans-male-transitioned",   "label": "Trans-male (transitioned)"},
    {"value": "trans-female-transitioned", "label": "Trans-female (transitioned)"},
    {"value": "intersex-male",             "label": "Intersex (identify as male)"},
    {"value": "intersex-female",           "label": "Intersex (identify as female)"},
    {"value": "non-binary",                "label": "Non-binary"},
    {"value": "trans-male-transition",     "label": "Trans-male (mid-transition)"},
    {"value": "trans-female-transition",   "label": "Trans-female (mid-transition)"},
    {"value": "other",                     "label": "Other"},
]

AGE_RANGE_OPTIONS: list[dict[str, str]] = [
    {"value": "5-13",  "label": "5-13 years old"},
    {"value": "14-24", "label": "14-24 years old"},
    {"value": "25-35", "label": "25-35 years old"},
    {"value": "36-50", "label": "36-50 years old"},
    {"value": "51-65", "label": "51-65 years old"},
    {"value": "65+",   "label": "65+ years old"},
]

_HEALTH_CONDITIONS = [
    "Asthma",
    "Diabetes Type 1",
    "Diabetes Type 2",
    "Heart Failure",
    "Kidney Stones",
    "Kidney Failure",
    "Liver Cirrhosis",
    "UTI",
    "Hyperthyroidism",
    "Pregnancy",
    "Breastfeeding",
    "Fever",
]

# value is the normalised key used by the health factor table
HEALTH_CONDITION_OPTIONS: list[dict[str, str]] = [
    {"value": c.lower(), "label": c} for c in _HEALTH_CONDITIONS
]

# Common medications for hydration-affecting conditions (autocomplete only).
MEDICATION_OPTIONS: list[str] = [
    # Diabetes
    "Metformin",
    "Insulin",
    "Glipizide",
    "Glyburide",
    "Januvia (Sitagliptin)",
    "Jardiance (Empagliflozin)",
    "Farxiga (Dapagliflozin)",
    "Ozempic (Semaglutide)",
    "Trulicity (Dulaglutide)",
    # Kidney / UTI
    "Flomax (Tamsulosin)",
    "Allopurinol",
    "Potassium Citrate",
    "Nitrofurantoin",
    "Ciprofloxacin",
    "Bactrim (Sulfamethoxazole)",
    # Heart
    "Lisinopril",
    "Losartan",
    "Metoprolol",
    "Amlodipine",
    "Furosemide (Lasix)",
    "Spironolactone",
    "Hydrochlorothiazide",
    "Carvedilol",
    "Digoxin",
    # Thyroid
    "Levothyroxine",
    "Methimazole",
    "Propylthiouracil",
    # Liver
    "Lactulose",
    "Rifaximin",
    "Propranolol",
    # Asthma
    "Albuterol (Ventolin)",
    "Fluticasone (Flovent)",
    "Montelukast (Singulair)",
    "Budesonide",
    "Prednisone",
    # Pregnancy / breastfeeding
    "Prenatal Vitamins",
    "Folic Acid",
    "Iron Supplements",
    "Calcium Supplements",
    # Common OTC
    "Acetaminophen (Tylenol)",
    "Ibuprofen (Advil)",
    "Aspirin",
    "Vitamin D",
    "Omega-3 Fish Oil",
    "Magnesium",
    "Probiotics",
]


def search_medications(query: str, selected: Iterable[str] = ()) -> list[str]:
    """Case-insensitive substring match, skipping already selected entries."""
    needle = query.strip().lower()
    taken = set(selected)
    return [
        m for m in MEDICATION_OPTIONS
        if needle in m.lower() and m not in taken
    ]
