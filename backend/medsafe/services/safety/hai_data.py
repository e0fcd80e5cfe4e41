"""
CDC healthcare-associated infection (HAI) reference data.
Source: https://www.cdc.gov/hai/data/index.html (statistics as of 2023).
"""

from typing import Dict, List

from .models import CdcInfo

CDC_HAI_PORTAL = "https://www.cdc.gov/hai/index.html"

HAI_TYPES: Dict[str, CdcInfo] = {
    "CLABSI": CdcInfo(
        name="Central Line-associated Bloodstream Infection (CLABSI)",
        description="Occurs when germs enter the bloodstream through a central line catheter",
        prevalence="41,000 cases in U.S. hospitals annually",
        mortality_rate="Up to 25% of patients who get a CLABSI will die",
        prevention_strategies=[
            "Proper insertion practices with appropriate hand hygiene",
            "Chlorhexidine skin antisepsis",
            "Daily review of central line necessity",
            "Proper maintenance of the line and injection ports",
        ],
        patient_safety_tips=[
            "Ask your healthcare providers to explain why you need the line and how long you will have it",
            "Speak up if the bandage comes off or the area around the catheter is wet or dirty",
            "Tell your healthcare provider immediately if the area around the catheter is red or sore",
            "Don't let visitors touch the catheter or tubing",
        ],
        cdc_resource_url="https://www.cdc.gov/hai/bsi/bsi.html",
    ),
    "CAUTI": CdcInfo(
        name="Catheter-associated Urinary Tract Infection (CAUTI)",
        description="Infection that occurs when germs enter the urinary tract via a urinary catheter",
        prevalence="Approximately 13,000 CAUTIs in U.S. hospitals annually",
        mortality_rate="13,000 deaths associated with UTIs annually (not all catheter-associated)",
        prevention_strategies=[
            "Insert catheters only when necessary and remove as soon as possible",
            "Use aseptic technique for insertion",
            "Maintain a closed drainage system",
            "Daily review of catheter necessity",
        ],
        patient_safety_tips=[
            "Ask if the catheter is still necessary every day",
            "Ensure healthcare workers clean their hands before and after touching the catheter",
            "Make sure the catheter tube is secured to your leg",
            "Report any pain, discomfort, or symptoms of infection immediately",
        ],
        cdc_resource_url="https://www.cdc.gov/hai/ca_uti/uti.html",
    ),
    "SSI": CdcInfo(
        name="Surgical Site Infection (SSI)",
        description="Infection that occurs after surgery in the part of the body where the surgery took place",
        prevalence="Approximately 157,500 SSIs in U.S. hospitals annually",
        mortality_rate="3% of patients who develop SSIs will die as a consequence",
        prevention_strategies=[
            "Appropriate use of antibiotics before surgery",
            "Proper skin preparation",
            "Good surgical technique and sterile conditions",
            "Postoperative wound care",
        ],
        patient_safety_tips=[
            "Follow all preoperative instructions exactly, especially about bathing or showering",
            "Do not shave the surgical site (this can increase infection risk)",
            "Tell your doctor about any medical problems including allergies",
            "Follow wound care instructions carefully after surgery",
            "Report any signs of infection immediately (redness, pain, drainage, fever)",
        ],
        cdc_resource_url="https://www.cdc.gov/hai/ssi/ssi.html",
    ),
    "VAP": CdcInfo(
        name="Ventilator-associated Pneumonia (VAP)",
        description="Pneumonia that develops in a person who is on a ventilator",
        prevalence="A significant portion of the 250,000 healthcare-associated pneumonias annually",
        mortality_rate="Up to 13% of patients with VAP will die",
        prevention_strategies=[
            "Elevation of the head of the bed",
            "Daily sedation interruptions and readiness to extubate assessment",
            "Peptic ulcer disease prophylaxis",
            "Oral care with chlorhexidine",
        ],
        patient_safety_tips=[
            "Ask how long ventilator use will be necessary",
            "Request daily assessment for ventilator removal if appropriate",
            "Ask care providers about oral care protocols being followed",
            "Ensure the head of the bed is elevated unless medically contraindicated",
        ],
        cdc_resource_url="https://www.cdc.gov/hai/vap/vap.html",
    ),
    "C. diff": CdcInfo(
        name="Clostridioides difficile Infection (C. diff)",
        description="Causes diarrhea and more serious intestinal conditions, often after antibiotic use",
        prevalence="223,900 estimated cases in hospitalized patients annually in the U.S.",
        mortality_rate="Approximately 12,800 deaths annually",
        prevention_strategies=[
            "Appropriate antibiotic use",
            "Early and accurate diagnosis",
            "Isolation of infected patients",
            "Hand hygiene with soap and water (not just alcohol-based sanitizer)",
            "Environmental cleaning with sporicidal agents",
        ],
        patient_safety_tips=[
            "Take antibiotics exactly as prescribed",
            "Tell your healthcare provider if you have been on antibiotics and get diarrhea within a few months",
            "Wash your hands frequently, especially after using the bathroom",
            "Ask visitors and healthcare providers to wash their hands before entering your room",
        ],
        cdc_resource_url="https://www.cdc.gov/cdiff/index.html",
    ),
    "MRSA": CdcInfo(
        name="Methicillin-resistant Staphylococcus aureus (MRSA)",
        description="A type of staph bacteria that's resistant to many antibiotics",
        prevalence="Approximately 323,700 cases in hospitalized patients annually",
        mortality_rate="10,600 deaths attributed to MRSA annually",
        prevention_strategies=[
            "Active surveillance (screening)",
            "Contact precautions for infected patients",
            "Hand hygiene",
            "Environmental cleaning",
            "Decolonization in certain situations",
        ],
        patient_safety_tips=[
            "Keep wounds covered",
            "Don't share personal items like towels or razors",
            "Tell your healthcare providers if you have had MRSA in the past",
            "Ensure healthcare workers wear gloves and gowns when caring for you if you have MRSA",
        ],
        cdc_resource_url="https://www.cdc.gov/mrsa/index.html",
    ),
}

GENERAL_PREVENTION_GUIDELINES: List[str] = [
    "Hand hygiene is the most important measure to prevent HAIs",
    "Healthcare providers should follow CDC infection control guidelines",
    "Patients should speak up if they have concerns about infection control practices",
    "Appropriate use of antibiotics helps prevent resistant infections",
    "Identifying infection risks early can prevent complications",
]

PATIENT_SAFETY_RIGHTS: List[str] = [
    "You have the right to ask healthcare workers if they have cleaned their hands",
    "You have the right to know your infection risks and how to prevent infections",
    "You can ask about your healthcare facility's infection rates",
    "You should receive education about any devices or procedures that increase infection risk",
    "You have the right to know what your healthcare facility is doing to prevent infections",
]

PREVENTION_TIPS: List[str] = [
    "Wash your hands frequently and thoroughly",
    "Ensure healthcare providers clean their hands before touching you",
    "Make sure that any devices used on you have been properly cleaned",
    "Ask about any infection prevention steps before, during, and after procedures or surgeries",
    "Take antibiotics exactly as prescribed and only when necessary",
]

HAI_PREVALENCE = "An estimated 687,000 HAIs in U.S. acute care hospitals annually"
HAI_MORTALITY = "About 72,000 hospital patients with HAIs died during their hospitalizations"


def general_hai_info() -> CdcInfo:
    return CdcInfo(
        name="Healthcare-Associated Infection Risk",
        description=(
            "CDC reports that on any given day, about 1 in 31 hospital patients "
            "has at least one healthcare-associated infection."
        ),
        prevalence=HAI_PREVALENCE,
        mortality_rate=HAI_MORTALITY,
        prevention_strategies=list(GENERAL_PREVENTION_GUIDELINES),
        patient_safety_tips=list(PATIENT_SAFETY_RIGHTS),
        cdc_resource_url=CDC_HAI_PORTAL,
    )


def prevention_info() -> CdcInfo:
    return CdcInfo(
        name="Healthcare-Associated Infection Prevention",
        description=(
            "Healthcare-associated infections are a significant cause of illness and death, "
            "but many can be prevented."
        ),
        prevalence=HAI_PREVALENCE,
        mortality_rate=HAI_MORTALITY,
        prevention_strategies=list(GENERAL_PREVENTION_GUIDELINES),
        patient_safety_tips=list(PATIENT_SAFETY_RIGHTS),
        cdc_resource_url=CDC_HAI_PORTAL,
    )
