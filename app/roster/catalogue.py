"""
Process catalogue: types, supply classes, member functions and the
assignment cardinality rule of each process type.
"""

import datetime
import random
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ProcessType(str, Enum):
    TEAM = "TEAM"
    TREM = "TREM"
    PT = "PT"
    GQR_COMMISSION = "Comissão de Conferência de Gêneros QR"
    AMMUNITION_COMMISSION = "Comissão de Conferência de Munição"


class ProcessClass(str, Enum):
    CLASS_I = "Classe I - Subsistência"
    CLASS_II = "Classe II - Intendência"
    CLASS_III = "Classe III - Óleos e Combustíveis"
    CLASS_IV = "Classe IV - Patrimônio"
    CLASS_V = "Classe V - Armamento e Munição"
    CLASS_VI = "Classe VI - Engenharia"
    CLASS_VII = "Classe VII - Comunicações"
    CLASS_VIII = "Classe VIII - Saúde"
    CLASS_IX = "Classe IX - Motomecanização ou Aviação"
    CLASS_X = "Classe X - Diversos"


class MilitaryFunction(str, Enum):
    """Role a military plays inside a process."""

    MEMBER_HOLDER = "Membro - Titular"
    MEMBER_SUBSTITUTE = "Membro - Substituto"
    PRESIDENT_HOLDER = "Presidente - Titular"
    PRESIDENT_SUBSTITUTE = "Presidente - Substituto"
    MEMBER = "Membro"
    PRESIDENT = "Presidente"
    TECHNICAL_ADVISOR = "Assessor Técnico"


class AssignmentRule(BaseModel):
    """How many militaries a process type needs."""

    minimum: int
    exact: bool = False

    def describe(self) -> str:
        noun = "militar" if self.minimum == 1 else "militares"
        if self.exact:
            return f"exatamente {self.minimum} {noun}"
        return f"pelo menos {self.minimum} {noun}"


_RULES: dict[ProcessType, AssignmentRule] = {
    ProcessType.GQR_COMMISSION: AssignmentRule(minimum=6, exact=True),
    ProcessType.AMMUNITION_COMMISSION: AssignmentRule(minimum=3),
    ProcessType.TEAM: AssignmentRule(minimum=3),
    ProcessType.TREM: AssignmentRule(minimum=3),
    ProcessType.PT: AssignmentRule(minimum=1),
}

_DEFAULT_RULE = AssignmentRule(minimum=3)


def assignment_rule(process_type: ProcessType | str) -> AssignmentRule:
    return _RULES.get(ProcessType(process_type), _DEFAULT_RULE)


def check_assignment_count(process_type: ProcessType | str, count: int) -> Optional[str]:
    """Return a user-facing error when ``count`` breaks the type's rule, else ``None``."""
    rule = assignment_rule(process_type)
    if rule.exact and count != rule.minimum:
        return f"Este tipo de processo requer {rule.describe()}."
    if count < rule.minimum:
        return f"Este tipo de processo requer {rule.describe()}."
    return None


def generate_process_number(today: Optional[datetime.date] = None, rng: Optional[random.Random] = None) -> str:
    """Random ``NNN/YYYY`` process number for the current year."""
    today = today or datetime.date.today()
    rng = rng or random.Random()
    return f"{rng.randint(100, 999)}/{today.year}"
