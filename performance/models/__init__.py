# -*- coding: utf-8 -*-
"""
Performance: weekly goals assigned to employees, and the KPI record log.
The metrics bag of each goal holds its raw KPI inputs plus the scores
computed by performance.services.scoring.
"""
from .goal import Goal
from .kpi_record import KpiRecord

__all__ = ["Goal", "KpiRecord"]
