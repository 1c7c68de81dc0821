"""TokenSim output interpreter agents package.

All agents inherit from BaseAgent and operate on InterpretationContext.
Agents do not import from each other — all communication flows through context.
"""

from tokensim.agents.base import AgentStatus, BaseAgent
from tokensim.agents.console_agent import ConsoleReportAgent
from tokensim.agents.output_agent import OutputAgent

__all__ = [
    "AgentStatus",
    "BaseAgent",
    "ConsoleReportAgent",
    "OutputAgent",
]
