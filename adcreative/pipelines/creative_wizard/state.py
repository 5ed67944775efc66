"""
Creative Wizard State - dataclass holding every selection made in the wizard.

Steps run in a fixed order:
    select_product -> select_style_and_platforms -> generate_and_select_concept
    -> generate_media -> generate_ad_copy_and_finish

Each non-terminal step has a guard that must hold before the wizard can
advance. Going back never clears anything, so earlier selections survive a
revise-and-advance round trip.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ...core.errors import MissingRequiredData
from ...core.models import AdCopy, AdPlatform, CreativeStyle, MediaGeneration, Product


class WizardStep(str, Enum):
    """Wizard steps in forward order"""
    SELECT_PRODUCT = "select_product"
    SELECT_STYLE_AND_PLATFORMS = "select_style_and_platforms"
    GENERATE_AND_SELECT_CONCEPT = "generate_and_select_concept"
    GENERATE_MEDIA = "generate_media"
    GENERATE_AD_COPY_AND_FINISH = "generate_ad_copy_and_finish"

    @property
    def position(self) -> int:
        return WIZARD_STEPS.index(self)

    @property
    def is_initial(self) -> bool:
        return self.position == 0

    @property
    def is_terminal(self) -> bool:
        return self.position == len(WIZARD_STEPS) - 1


WIZARD_STEPS: List[WizardStep] = list(WizardStep)


@dataclass
class CreativeWizardState:
    """
    State for one creative production run.

    Lifecycle:
        1. Caller creates an empty state (or the wizard does)
        2. Selections and generated results are written as the user goes
        3. advance()/go_back() move between steps; create_creative() on the
           wizard consumes the finished state
    """

    # === SELECTIONS ===
    product: Optional[Product] = None
    style: Optional[CreativeStyle] = None
    platforms: List[AdPlatform] = field(default_factory=list)
    selected_concept: Optional[str] = None

    # === GENERATED ===
    generated_concepts: List[str] = field(default_factory=list)
    generated_media: Optional[MediaGeneration] = None
    generated_ad_copy: Optional[AdCopy] = None

    # === TRACKING ===
    current_step: WizardStep = WizardStep.SELECT_PRODUCT
    is_loading: bool = False
    error: Optional[str] = None
    error_step: Optional[WizardStep] = None

    def can_advance(self) -> bool:
        """Whether "Next" is enabled on the current step."""
        step = self.current_step
        if step == WizardStep.SELECT_PRODUCT:
            return self.product is not None
        if step == WizardStep.SELECT_STYLE_AND_PLATFORMS:
            return self.style is not None
        if step == WizardStep.GENERATE_AND_SELECT_CONCEPT:
            return self.selected_concept is not None
        if step == WizardStep.GENERATE_MEDIA:
            return self.generated_media is not None
        return False

    def can_create(self) -> bool:
        """Whether "Create" is enabled (terminal step with ad copy present)."""
        return self.current_step.is_terminal and self.generated_ad_copy is not None

    def advance(self) -> WizardStep:
        """
        Move to the next step.

        Raises:
            MissingRequiredData: If the current step's guard does not hold
                or the current step is terminal
        """
        if self.current_step.is_terminal:
            raise MissingRequiredData("Already on the final step; create the creative instead")
        if not self.can_advance():
            raise MissingRequiredData(f"Step '{self.current_step.value}' is not complete")
        self.current_step = WIZARD_STEPS[self.current_step.position + 1]
        return self.current_step

    def go_back(self) -> WizardStep:
        """Move to the previous step, keeping all selections. No-op on the first step."""
        if not self.current_step.is_initial:
            self.current_step = WIZARD_STEPS[self.current_step.position - 1]
        return self.current_step

    def toggle_platform(self, platform: AdPlatform) -> None:
        platform = AdPlatform(platform)
        if platform in self.platforms:
            self.platforms.remove(platform)
        else:
            self.platforms.append(platform)

    def mark_error(self, error: Exception) -> None:
        self.error = str(error)
        self.error_step = self.current_step
        self.is_loading = False
