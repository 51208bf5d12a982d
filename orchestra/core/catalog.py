"""Agent catalog: lookup of specialist agent descriptors."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from orchestra.core.schemas import AgentCategory

IMAGE_GENERATION = "image-generation"


@dataclass(frozen=True)
class AgentDescriptor:
    """A specialised completion configuration that performs one task."""
    id: str
    name: str
    description: str
    category: AgentCategory
    default_model: str
    responsibilities: Tuple[str, ...] = ()
    capabilities: Tuple[str, ...] = ()
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None

    @property
    def generates_images(self) -> bool:
        return IMAGE_GENERATION in self.capabilities

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "default_model": self.default_model,
            "responsibilities": list(self.responsibilities),
            "capabilities": list(self.capabilities),
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
        }


class AgentCatalog:
    """Indexes agents by id, category and capability."""

    def __init__(self, agents: Iterable[AgentDescriptor]):
        self._agents: Dict[str, AgentDescriptor] = {}
        self._by_category: Dict[AgentCategory, List[AgentDescriptor]] = {
            category: [] for category in AgentCategory
        }
        self._by_capability: Dict[str, List[AgentDescriptor]] = {}

        for agent in agents:
            if agent.id in self._agents:
                raise ValueError(f"Duplicate agent id: {agent.id}")
            self._agents[agent.id] = agent
            self._by_category[agent.category].append(agent)
            for capability in agent.capabilities:
                self._by_capability.setdefault(capability, []).append(agent)

    def __contains__(self, agent_id: str) -> bool:
        return agent_id in self._agents

    def __len__(self) -> int:
        return len(self._agents)

    def lookup(self, agent_id: str) -> Optional[AgentDescriptor]:
        return self._agents.get(agent_id)

    def by_category(self, category: AgentCategory) -> List[AgentDescriptor]:
        return list(self._by_category[category])

    def by_capability(self, capability: str) -> List[AgentDescriptor]:
        return list(self._by_capability.get(capability, []))

    def find_for_capabilities(self, capabilities: Iterable[str]) -> List[AgentDescriptor]:
        """Agents covering any of the capabilities, first-seen order, no duplicates."""
        found: Dict[str, AgentDescriptor] = {}
        for capability in capabilities:
            for agent in self._by_capability.get(capability, []):
                found.setdefault(agent.id, agent)
        return list(found.values())

    def all(self) -> List[AgentDescriptor]:
        return list(self._agents.values())
