from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

settings.register_profile(
    "ci",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("ci")


INCIDENT_MD = """<!-- FILE_TYPE: FIRE_TIMELINE -->
# 大埔宏福苑五級火

<!-- BASIC_INFO_START -->
| KEY | VALUE |
|-----|-------|
| INCIDENT_ID | WANG_FUK_COURT_FIRE_2025 |
| INCIDENT_NAME | 大埔宏福苑五級火 |
| DATE_RANGE | 2025-11-26/2025-11-28 |
| LOCATION | 大埔宏福苑宏昌閣 |
| MAP | [地圖](https://maps.google.com) |
| DISASTER_LEVEL | LEVEL_5 |
| DURATION | 01:19:27:00 |
| AFFECTED_BUILDINGS | 7 |
| SOURCES | HK01,SBS_AUSTRALIA |
<!-- BASIC_INFO_END -->

### 起火原因

<!-- FIRE_CAUSE_START -->
<!-- TRANSLATE_TEXT -->
外牆大型維修工程的棚架起火。
<!-- FIRE_CAUSE_END -->

### 災情嚴重性

<!-- SEVERITY_START -->
是次火警為香港60年來最嚴重的火災事故。
<!-- SEVERITY_END -->

## 時間線

<!-- TIMELINE_TABLE_START -->
| DATE | TIME | EVENT | CATEGORY | CASUALTIES | SOURCE | VIDEO | PHOTO | END |
|------|------|-------|----------|------------|--------|-------|-------|-----|
| 2025-11-26 | 14:51 | 宏昌閣外牆棚架起火 | FIRE_START | STATUS_NONE | [HK01](https://hk01.com/a) | | | |
| | 15:02左右 | 火勢升為三級 | FIRE_ESCALATION | INJURED:2 | HK01, SBS | | | |
| 2025-11-27 | 9:05 | 一名消防員殉職 | FIREFIGHTING | DEAD:13(ON_SITE:9,TRANSIT:4),INJURED:7,MISSING:200,FIREFIGHTER_DEAD:1 | | [片段](https://youtu.be/x) | [現場](https://img.example/1.jpg) | x |
| 2025-11-27 | 晚上 | 時間不明 | OTHER | | | | | |
| 2025-11-28 | TIME_ONGOING | 搜救持續 | RESCUE | 128死79傷，150名失蹤 | | | | |
<!-- TIMELINE_TABLE_END -->

## 關鍵統計數據

<!-- KEY_STATISTICS_START -->
| FIRE_DURATION | 01:19:27:00 |
| FIRE_LEVEL | LEVEL_5 |
| FINAL_DEATHS | 128 |
| FIREFIGHTER_CASUALTIES | INJURED:11,DEAD:1 |
| FIREFIGHTERS_DEPLOYED | 1250 |
| FIRE_VEHICLES | 304 |
| HELP_CASES | 346 |
| HELP_CASES_PROCESSED | 296 |
| AFFECTED_BUILDINGS | 7 |
| SHELTER_USERS | 900 |
| MISSING_PERSONS | 279 |
| UNIDENTIFIED_BODIES | 89 |
<!-- KEY_STATISTICS_END -->

## 資料來源

<!-- SOURCES_START -->
| SOURCE_NAME | SOURCE_TITLE | SOURCE_URL |
|-------------|--------------|------------|
| HK01 | 宏福苑大火 | <https://hk01.com> |
| SBS | Title | |
<!-- SOURCES_END -->

## 註釋

<!-- NOTES_START -->
- Note 1
- Note 2
<!-- NOTES_END -->
"""


LEGACY_MD = """# 火警時間線

**11月26日**

| 日期 | 時間 | 事件 | 類別 | 傷亡 |
|------|------|------|------|------|
| | 14:51 | 起火 | FIRE_START | STATUS_NONE |
| | 15:30 | 升為四級火 | FIRE_ESCALATION | 3傷 |

### 11月27日（星期四）

| | 08:00 | 搜救 | RESCUE | 128死79傷 |
| | 09:00 | 太短 |
"""


DETAILED_MD = """<!-- FILE_TYPE: DETAILED_TIMELINE -->

<!-- PHASE_START -->
<!-- PHASE_INFO_START -->
| KEY | VALUE |
|-----|-------|
| PHASE_NAME | 火災爆發 |
| PHASE_CATEGORY | FIRE_ESCALATION |
| DATE_RANGE | 2025-11-26 至 2025-11-27 |
| STATUS | COMPLETED |
<!-- PHASE_INFO_END -->

<!-- PHASE_DESCRIPTION_START -->
火勢由棚架蔓延。
七座大廈受影響。
<!-- PHASE_DESCRIPTION_END -->

<!-- TIMELINE_TABLE_START -->
| DATE | TIME | EVENT | CATEGORY | CASUALTIES | STATUS_NOTE |
|------|------|-------|----------|------------|-------------|
| 2025-11-26 | 14:51 | 起火 | FIRE_START | STATUS_NONE | |
| | 18:22 | 升為五級火 | FIRE_ESCALATION | INJURED:4 | 最高級別 |
<!-- TIMELINE_TABLE_END -->
<!-- PHASE_END -->

<!-- PHASE_START -->
<!-- PHASE_INFO_START -->
| KEY | VALUE |
|-----|-------|
| PHASE_NAME | 善後 |
| PHASE_CATEGORY | RELIEF |
| DATE_RANGE | 2025-11-28 |
| STATUS | ONGOING |
<!-- PHASE_INFO_END -->

<!-- TIMELINE_TABLE_START -->
| 日期 | 時間 | 事件 | 類別 |
|------|------|------|------|
| 2025-11-28 | TIME_ALL_DAY | 設立臨時庇護站 | RELIEF |
<!-- TIMELINE_TABLE_END -->
<!-- PHASE_END -->

<!-- LONG_TERM_TRACKING_START -->
| DATE | CATEGORY | EVENT | STATUS | NOTE |
|------|----------|-------|--------|------|
| 2025-12-05 | INVESTIGATION | 獨立委員會成立 | ONGOING | |
| 待定 | INVESTIGATION | 日期未定 | PENDING | |
<!-- LONG_TERM_TRACKING_END -->

<!-- CATEGORY_METRICS_START -->

| CATEGORY | METRIC_KEY | METRIC_LABEL | METRIC_VALUE | METRIC_UNIT |
|----------|------------|--------------|--------------|-------------|
| FIREFIGHTING | PERSONNEL_DEPLOYED | 出動人員 | 1250 | 人 |
| RELIEF | AID_FUND | 援助資金 | 300000000 | 港元 |
| FIRE_ESCALATION | MAX_FIRE_LEVEL | 最高級別 | 5 | 級 |

<!-- CATEGORY_METRICS_END -->

<!-- NOTES_START -->
- 資料持續更新
<!-- NOTES_END -->
"""


@pytest.fixture
def incident_md() -> str:
    return INCIDENT_MD


@pytest.fixture
def legacy_md() -> str:
    return LEGACY_MD


@pytest.fixture
def detailed_md() -> str:
    return DETAILED_MD
