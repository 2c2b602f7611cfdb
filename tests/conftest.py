"""Shared fixtures for Freelance Hub tests."""

from datetime import datetime, timezone

import pytest

from freelance_hub.domain.models import JobFields, ProfileFields
from freelance_hub.logging.context import clear_log_context

FIXED_NOW = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)

JOB_DESCRIPTION = (
    "We are looking for an experienced smart contract engineer to design, implement "
    "and audit a set of upgradeable Solidity contracts for our lending protocol."
)


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def job_values():
    """Raw job posting values as a form would submit them."""
    return {
        "title": "Senior Solidity Engineer",
        "description": JOB_DESCRIPTION,
        "category": "Blockchain",
        "experience": "Senior",
        "skills": ["Solidity", "Hardhat"],
        "budget_min": "50",
        "budget_max": "100",
        "currency": "USDC",
        "duration_type": "weeks",
        "duration_value": "6",
        "work_type": "Contract",
        "location_pref": "Remote",
        "deadline": "2024-06-30",
        "contact_method": "Wallet DM",
    }


@pytest.fixture
def job_fields(job_values):
    return JobFields(**job_values)


@pytest.fixture
def profile_fields():
    return ProfileFields(
        display_name="Ada Builder",
        email="ada@example.com",
        phone="+15550100",
        country_code="US",
        bio="Full-stack web3 developer focused on DeFi front ends and contract tooling.",
        primary_occupation="Web3 Developer",
        years_experience="7",
        hourly_rate="85",
        skills=["React", "Solidity", "Wagmi"],
        languages=["English"],
    )


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
