"""Service candidate catalogs.

A catalog is a YAML file with a top-level ``services`` list:

    services:
      - title: Solidity Engineer
        description: Smart contract development and audits
        skills: [Solidity, Hardhat, Security]
        experience: Senior
        rate_min: 50
        rate_max: 100
        remote: true
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from freelance_hub.config.exceptions import ConfigurationError
from freelance_hub.domain.models import ExperienceLevel
from freelance_hub.logging import get_logger

from .models import RateRange, ServiceCandidate

logger = get_logger(__name__, component="matching")


def _service(
    title: str,
    description: str,
    skills: List[str],
    experience: ExperienceLevel,
    rate: Tuple[int, int],
    remote: bool,
) -> ServiceCandidate:
    return ServiceCandidate(
        title=title,
        description=description,
        skill_set=skills,
        experience_level=experience,
        rate_range=RateRange(min=rate[0], max=rate[1]),
        remote_capable=remote,
    )


# Demonstration catalog used when no catalog file is configured
DEFAULT_CATALOG: Tuple[ServiceCandidate, ...] = (
    _service(
        "Solidity Engineer",
        "Smart contract development and audits",
        ["Solidity", "Hardhat", "Security"],
        ExperienceLevel.SENIOR,
        (50, 100),
        True,
    ),
    _service(
        "Web3 Frontend Dev",
        "Next.js + Wagmi dApp UIs",
        ["React", "Next.js", "Wagmi", "Viem"],
        ExperienceLevel.MID,
        (35, 70),
        True,
    ),
    _service(
        "DeFi Strategist",
        "Tokenomics and protocol design",
        ["AI/ML", "Design", "Security"],
        ExperienceLevel.EXPERT,
        (80, 150),
        True,
    ),
)


def parse_catalog(data: Dict[str, Any]) -> List[ServiceCandidate]:
    """Build candidates from a parsed catalog document.

    Raises:
        ConfigurationError: If the document or any entry is invalid
    """
    if not isinstance(data, dict) or not isinstance(data.get("services"), list):
        raise ConfigurationError(
            "Catalog must contain a 'services' list",
            suggestions=["Add a top-level 'services:' key with one entry per service"],
        )

    candidates = []
    errors = []
    for index, entry in enumerate(data["services"]):
        if not isinstance(entry, dict):
            errors.append(f"services[{index}]: expected a mapping")
            continue
        try:
            candidates.append(
                ServiceCandidate(
                    title=entry.get("title"),
                    description=entry.get("description", ""),
                    skill_set=entry.get("skills", []),
                    experience_level=entry.get("experience"),
                    rate_range={"min": entry.get("rate_min"), "max": entry.get("rate_max")},
                    remote_capable=entry.get("remote", False),
                )
            )
        except PydanticValidationError as e:
            for error in e.errors():
                field_path = ".".join(str(loc) for loc in error["loc"])
                errors.append(f"services[{index}].{field_path}: {error['msg']}")

    if errors:
        raise ConfigurationError("Invalid service catalog", errors=errors)

    return candidates


def load_catalog(path: Union[str, Path]) -> List[ServiceCandidate]:
    """Load service candidates from a YAML catalog file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(
            f"Catalog file not found: {path}",
            suggestions=["Check matching.catalog_path in your configuration"],
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in catalog {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read catalog {path}: {e}") from e

    candidates = parse_catalog(data)
    logger.info(
        f"Loaded {len(candidates)} services from {path}",
        extra={"event": "matching.catalog.loaded", "path": str(path), "services": len(candidates)},
    )
    return candidates
