from config.schema import (
    AcademicConfig,
    GeometryConfig,
    PlannerConfig,
)


def default_geometry() -> GeometryConfig:
    """Standard-Geometrie des Radialkalenders (Zeichenfläche 800 × 800).

    Lane-Radien:
      Lane 0   146
      Lane 1   160
      Lane 2   174
      ...
      Lane 11  300
      ab Lane 12 auf 305 geklemmt
    """
    return GeometryConfig(
        base_radius=146,
        ring_spacing=14,
        max_radius=305,
        center_x=400,
        center_y=400,
        exam_offset=12,
        exam_guide_min_angle=3,
        month_label_radius=322,
    )


def default_academic() -> AcademicConfig:
    """Studienjahre 2025/2026, Studienbeginn im Sommersemester 2025."""
    return AcademicConfig(
        allowed_years=[2025, 2026],
        semesters_by_year={2025: ["winter", "summer"], 2026: ["winter", "summer"]},
        planning_year=2026,
        program_base_year=2025,
        program_base_semester="summer",
    )


def default_planner_config() -> PlannerConfig:
    """Vollständige Default-Konfiguration."""
    return PlannerConfig(
        planner_name="Semester-Radial-Planer",
        language="de",
        data_path="output/planner_data.json",
        geometry=default_geometry(),
        academic=default_academic(),
    )
