"""
Creative Wizard - product -> style -> concept -> media -> copy, one creative per run.
"""

from .state import CreativeWizardState, WizardStep, WIZARD_STEPS
from .wizard import CreativeWizard

__all__ = ['CreativeWizard', 'CreativeWizardState', 'WizardStep', 'WIZARD_STEPS']
