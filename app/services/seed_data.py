from __future__ import annotations

from datetime import date

from app.models.employee import Department, Employee, EmploymentStatus


def default_employees() -> list[Employee]:
    """Records written to an empty store on first run."""
    return [
        Employee(
            id="1",
            full_name="Sarah Jenkins",
            role="Founder & CEO",
            department=Department.LEADERSHIP,
            join_date=date(2014, 3, 15),
            status=EmploymentStatus.ACTIVE,
            bio=(
                "A visionary who started the company in a small garage. Sarah led the company "
                "through three major transformations and a successful IPO."
            ),
            skills=["Leadership", "Strategic planning", "Public speaking"],
            avatar_url="https://picsum.photos/seed/sarah/200/200",
        ),
        Employee(
            id="2",
            full_name="David Chen",
            role="CTO",
            department=Department.ENGINEERING,
            join_date=date(2014, 4, 1),
            status=EmploymentStatus.ACTIVE,
            bio=(
                "Architect of the core platform. David is known for staying calm during outages "
                "and for his love of functional programming."
            ),
            skills=["Systems architecture", "Go", "Mentoring"],
            avatar_url="https://picsum.photos/seed/david/200/200",
        ),
        Employee(
            id="3",
            full_name="Emily Thorne",
            role="Head of Sales",
            department=Department.SALES,
            join_date=date(2015, 1, 10),
            leave_date=date(2020, 5, 15),
            status=EmploymentStatus.ALUMNUS,
            bio="Built our sales team from scratch. Now leads growth at a large fintech unicorn.",
            skills=["Negotiation", "Team building"],
            avatar_url="https://picsum.photos/seed/emily/200/200",
        ),
        Employee(
            id="4",
            full_name="Marcus Johnson",
            role="Senior Engineer",
            department=Department.ENGINEERING,
            join_date=date(2016, 8, 20),
            status=EmploymentStatus.ACTIVE,
            bio="The go-to expert for database tuning. Marcus has mentored more than 20 junior engineers.",
            skills=["PostgreSQL", "React", "Node.js"],
            avatar_url="https://picsum.photos/seed/marcus/200/200",
        ),
        Employee(
            id="5",
            full_name="Jessica Alba",
            role="Product Designer",
            department=Department.DESIGN,
            join_date=date(2018, 2, 14),
            status=EmploymentStatus.ACTIVE,
            bio=(
                'Defined our visual language "Aurora". Passionate about accessibility and '
                "user-centred design."
            ),
            skills=["Figma", "User research", "Prototyping"],
            avatar_url="https://picsum.photos/seed/jessica/200/200",
        ),
        Employee(
            id="6",
            full_name="Robert Speed",
            role="Operations Engineer",
            department=Department.OPERATIONS,
            join_date=date(2019, 11, 2),
            status=EmploymentStatus.ACTIVE,
            bio="Automated everything that could be automated.",
            skills=["Kubernetes", "Terraform", "CI/CD"],
            avatar_url="https://picsum.photos/seed/rob/200/200",
        ),
    ]
