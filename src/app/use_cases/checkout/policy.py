"""Tabela de política por etapa do checkout.

Define, por modo, quais falhas do provedor abortam o checkout e quais
são apenas logadas. Etapas ausentes da tabela não rodam naquele modo.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from app.domain.checkout import CheckoutMode, CheckoutStep, StepPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping

STEP_POLICIES: Mapping[CheckoutMode, Mapping[CheckoutStep, StepPolicy]] = MappingProxyType(
    {
        CheckoutMode.STRICT: MappingProxyType(
            {
                CheckoutStep.PROFILE: StepPolicy.FATAL,
                CheckoutStep.INVESTOR: StepPolicy.FATAL,
                CheckoutStep.OTP_LINK: StepPolicy.FATAL,
            }
        ),
        # O investimento já está registrado quando perfil/patch rodam
        CheckoutMode.INVESTMENT_FIRST: MappingProxyType(
            {
                CheckoutStep.INVESTOR: StepPolicy.FATAL,
                CheckoutStep.PROFILE: StepPolicy.BEST_EFFORT,
                CheckoutStep.PATCH: StepPolicy.BEST_EFFORT,
                CheckoutStep.OTP_LINK: StepPolicy.FATAL,
            }
        ),
    }
)


def policy_for(mode: CheckoutMode, step: CheckoutStep) -> StepPolicy:
    """Política da etapa no modo.

    Raises:
        KeyError: Se a etapa não faz parte do modo.
    """
    return STEP_POLICIES[mode][step]


def is_best_effort(mode: CheckoutMode, step: CheckoutStep) -> bool:
    return policy_for(mode, step) is StepPolicy.BEST_EFFORT
