"""Health conditions and lab-value classification."""

from dataclasses import dataclass
from enum import StrEnum

from sehat_sense.domain.reports import ReportData

HBA1C_DIABETES = 6.5
HBA1C_PREDIABETES = 5.7
LDL_HIGH = 130
TRIGLYCERIDES_HIGH = 150
SGPT_HIGH = 40
VITAMIN_D_LOW = 20
VITAMIN_B12_LOW = 200


class Condition(StrEnum):
    """Health concern or goal used to personalize advice."""

    PREDIABETES = "prediabetes"
    DIABETES = "diabetes"
    FATTY_LIVER = "fatty_liver"
    HIGH_CHOLESTEROL = "high_cholesterol"
    HIGH_BLOOD_PRESSURE = "high_blood_pressure"
    VITAMIN_D_DEFICIENCY = "vitamin_d_deficiency"
    VITAMIN_B12_DEFICIENCY = "vitamin_b12_deficiency"
    PCOS_HORMONAL_IMBALANCE = "pcos_hormonal_imbalance"
    WEIGHT_LOSS_GOAL = "weight_loss_goal"

    @property
    def spoken(self) -> str:
        """Return the value with underscores replaced by spaces."""
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class ConditionDetail:
    """Static display metadata for a condition."""

    label: str
    description: str
    icon: str


CONDITION_DETAILS: dict[Condition, ConditionDetail] = {
    Condition.PREDIABETES: ConditionDetail(
        "Pre-diabetes", "Managing blood sugar levels.", "droplet"
    ),
    Condition.DIABETES: ConditionDetail(
        "Diabetes", "Strict blood sugar control.", "droplet"
    ),
    Condition.FATTY_LIVER: ConditionDetail(
        "Fatty Liver", "Focusing on a low-fat diet.", "test-tube"
    ),
    Condition.HIGH_CHOLESTEROL: ConditionDetail(
        "High Cholesterol", "Limiting saturated fats.", "activity"
    ),
    Condition.HIGH_BLOOD_PRESSURE: ConditionDetail(
        "High Blood Pressure", "Managing sodium and potassium.", "heart"
    ),
    Condition.VITAMIN_D_DEFICIENCY: ConditionDetail(
        "Vitamin D Deficiency", "Needs Vitamin D rich foods.", "sun"
    ),
    Condition.VITAMIN_B12_DEFICIENCY: ConditionDetail(
        "Vitamin B12 Deficiency", "Needs Vitamin B12 sources.", "beaker"
    ),
    Condition.PCOS_HORMONAL_IMBALANCE: ConditionDetail(
        "PCOS/Hormonal", "Balancing hormones via diet.", "sliders-horizontal"
    ),
    Condition.WEIGHT_LOSS_GOAL: ConditionDetail(
        "Weight Loss Goal", "Calorie and macro management.", "scale"
    ),
}


def derive_conditions(report: ReportData) -> set[Condition]:
    """Classify lab values into conditions.

    Each rule only looks at the fields it needs; a missing field never
    triggers its rule.
    """
    conditions: set[Condition] = set()
    if report.hba1c is not None:
        if report.hba1c >= HBA1C_DIABETES:
            conditions.add(Condition.DIABETES)
        elif report.hba1c >= HBA1C_PREDIABETES:
            conditions.add(Condition.PREDIABETES)
    if (report.ldl is not None and report.ldl >= LDL_HIGH) or (
        report.triglycerides is not None
        and report.triglycerides >= TRIGLYCERIDES_HIGH
    ):
        conditions.add(Condition.HIGH_CHOLESTEROL)
    if report.sgpt is not None and report.sgpt > SGPT_HIGH:
        conditions.add(Condition.FATTY_LIVER)
    if report.vitamin_d is not None and report.vitamin_d < VITAMIN_D_LOW:
        conditions.add(Condition.VITAMIN_D_DEFICIENCY)
    if report.vitamin_b12 is not None and report.vitamin_b12 < VITAMIN_B12_LOW:
        conditions.add(Condition.VITAMIN_B12_DEFICIENCY)
    return conditions
