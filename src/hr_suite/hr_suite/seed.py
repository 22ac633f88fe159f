"""Demo data for local development (SEED_DEMO_DATA)."""
from __future__ import annotations

import logging

from .container import Container

logger = logging.getLogger(__name__)

DEMO_TENANT = "tenant-1"
DEMO_USER = "user-1"


def seed_demo_data(container: Container) -> None:
    recruitment = container.recruitment_service
    job = recruitment.create_job_posting(
        DEMO_TENANT,
        {
            "title": "Software Engineer",
            "department_id": "dept-it",
            "description": "We are looking for a skilled Software Engineer to join our dynamic development team.",
            "key_responsibilities": [
                "Develop and maintain web applications",
                "Collaborate with cross-functional teams",
                "Write clean, maintainable code",
            ],
            "required_skills": ["JavaScript", "React", "Node.js"],
            "preferred_skills": ["TypeScript", "AWS"],
            "qualifications": ["Bachelor's degree in Computer Science", "3+ years experience"],
            "employment_type": "permanent",
            "work_arrangement": "hybrid",
            "vacancies": 2,
            "min_salary": 5000,
            "max_salary": 7000,
            "currency": "SGD",
            "allow_cover_letter": True,
            "is_published": True,
        },
        DEMO_USER,
    )
    recruitment.submit_application(
        job.id,
        {
            "first_name": "John",
            "last_name": "Doe",
            "email": "john.doe@example.com",
            "phone": "+65 9876 5432",
            "resume_url": "https://example.com/resume.pdf",
            "cover_letter": "I am excited to apply for this position...",
        },
    )

    employees = container.employee_service
    for code, name, email, department, position, join_date, salary in (
        ("EMP001", "John Smith", "john.smith@example.com", "IT", "Senior Developer", "2022-03-01", 7200),
        ("EMP002", "Alice Brown", "alice.brown@example.com", "Marketing", "Marketing Lead", "2021-07-15", 6500),
        ("EMP003", "Sarah Johnson", "sarah.johnson@example.com", "HR", "HR Manager", "2020-01-06", 8000),
    ):
        employees.create_employee(
            DEMO_TENANT,
            {
                "employee_code": code,
                "full_name": name,
                "email": email,
                "department": department,
                "position": position,
                "join_date": join_date,
                "basic_salary": salary,
            },
        )

    leave = container.leave_service
    annual = leave.apply_leave(
        DEMO_TENANT,
        {
            "employee_code": "EMP001",
            "employee_name": "John Smith",
            "department": "Engineering",
            "leave_type": "Annual Leave",
            "start_date": "2024-02-15",
            "end_date": "2024-02-19",
            "reason": "Family vacation",
            "manager": "Sarah Johnson",
        },
    )
    leave.apply_leave(
        DEMO_TENANT,
        {
            "employee_code": "EMP002",
            "employee_name": "Alice Brown",
            "department": "Marketing",
            "leave_type": "Medical Leave",
            "start_date": "2024-02-10",
            "end_date": "2024-02-12",
            "reason": "Medical appointment",
        },
    )
    leave.approve_leave(annual.id, DEMO_TENANT, DEMO_USER)

    container.customer_service.create_customer(
        DEMO_TENANT,
        {
            "first_name": "Mary",
            "last_name": "Tan",
            "company": "Tan Trading Pte Ltd",
            "email": "mary@tantrading.example",
            "phone": "+65 6123 4567",
            "billing_address": "10 Anson Road #12-01",
            "billing_city": "Singapore",
            "billing_terms": "Net 30",
            "open_balance": "1250.00",
        },
    )
    container.vendor_service.create_vendor(
        DEMO_TENANT,
        {
            "name": "John Doe",
            "company": "Doe Enterprises",
            "email": "johndoe@doeenterprises.com",
            "phone": "927-130-7110",
            "category": "Office Supplies",
            "address": "123 Supply St, NY 10001",
            "tax_id": "TAX123456789",
            "payment_terms": "Net 30",
            "credit_limit": 10000,
            "open_balance": "1883.55",
        },
    )
    logger.info("Demo data seeded for %s", DEMO_TENANT)
