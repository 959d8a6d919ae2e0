"""One-shot generator for the static ``dashboard-data.json`` file.

Collects the agent roster and gateway details from the OpenClaw config, the
cron job snapshot, the project list, a system summary and Gemini API usage,
and writes them to ``public/dashboard-data.json`` for the front end. Run it
locally before deploying the static site.

Usage:
    sysmon-snapshot
    sysmon-snapshot --config ~/.openclaw/openclaw.json --output /tmp/data.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import platform
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from sysmon import openclaw
from sysmon.collectors.errors import CollectionFailure
from sysmon.collectors.system_sampler import MetricsSampler
from sysmon.config import settings

logger = logging.getLogger("sysmon.generator")

GEMINI_LIMITS = {"rpd": 500, "image_rpd": 50, "rpm": 15}
GEMINI_HISTORY_DAYS = 7
_EMPTY_GEMINI_DAY = {
    "total_requests": 0,
    "image_requests": 0,
    "text_requests": 0,
    "errors": 0,
}


# ── Sections ─────────────────────────────────────────


def collect_agents(config: dict[str, Any]) -> list[dict[str, Any]]:
    """Agent roster with model ids resolved to their display names."""
    agent_list = (config.get("agents") or {}).get("list") or []
    providers = (config.get("models") or {}).get("providers") or {}

    agents: list[dict[str, Any]] = []
    for agent in agent_list:
        model = agent.get("model") or "unknown"
        provider, _, model_id = model.partition("/")

        display = model
        for model_def in (providers.get(provider) or {}).get("models") or []:
            if model_def.get("id") == model_id:
                display = model_def.get("name") or model
                break

        agents.append(
            {
                "id": agent.get("id"),
                "name": agent.get("name"),
                "model": display,
                "role": (agent.get("identity") or {}).get("name") or "",
                "provider": provider,
            }
        )
    return agents


def collect_openclaw_info(config: dict[str, Any], tz_name: str) -> dict[str, Any]:
    channels = config.get("channels") or {}
    accounts = (channels.get("telegram") or {}).get("accounts") or {}
    first_account = next(iter(accounts.values()), None) or {}

    return {
        "port": openclaw.gateway_port(config),
        "mode": openclaw.gateway_mode(config),
        "timezone": tz_name,
        "python_version": platform.python_version(),
        "agent_count": len((config.get("agents") or {}).get("list") or []),
        "channels": list(channels),
        "telegram_groups": len(first_account.get("groups") or {}),
    }


def read_cron_jobs(path: Path) -> list[Any]:
    if not path.exists():
        return []
    return json.loads(path.read_text(encoding="utf-8"))


def read_projects(path: Path) -> tuple[list[Any], list[dict[str, Any]]]:
    """Return ``(projects, sites)``; sites are the projects that have a URL."""
    projects = json.loads(path.read_text(encoding="utf-8")).get("projects") or []
    sites = [
        {"name": p.get("name"), "url": p["url"], "status": p.get("status")}
        for p in projects
        if p.get("url")
    ]
    return projects, sites


async def collect_system_summary(sampler: MetricsSampler) -> dict[str, Any]:
    snapshot = await sampler.capture()
    os_info = snapshot.os
    return {
        "cpu": snapshot.cpu.load if snapshot.cpu else None,
        "memory_used_gb": snapshot.memory.used_gb if snapshot.memory else None,
        "memory_total_gb": snapshot.memory.total_gb if snapshot.memory else None,
        "memory_percent": snapshot.memory.percent if snapshot.memory else None,
        "os": f"{os_info.distro} {os_info.release}" if os_info else "",
        "hostname": os_info.hostname if os_info else "",
        "platform": os_info.platform if os_info else "",
    }


def read_gemini_usage(
    path: Path,
    tz_name: str,
    now: datetime | None = None,
) -> dict[str, Any] | None:
    """Today's usage, fixed limits and the last week of history, if tracked."""
    if not path.exists():
        return None

    usage = json.loads(path.read_text(encoding="utf-8"))
    daily = usage.get("daily") or {}
    now = now or datetime.now(timezone.utc)
    today = now.astimezone(ZoneInfo(tz_name)).date().isoformat()

    return {
        "today": daily.get(today) or dict(_EMPTY_GEMINI_DAY),
        "limits": dict(GEMINI_LIMITS),
        "history": dict(sorted(daily.items())[-GEMINI_HISTORY_DAYS:]),
    }


# ── Assembly ─────────────────────────────────────────


async def build_dashboard_data(
    config_path: Path,
    projects_path: Path,
    cron_snapshot_path: Path,
    gemini_usage_path: Path,
    tz_name: str,
    sampler: MetricsSampler | None = None,
) -> dict[str, Any]:
    """Assemble the snapshot. A failing section is logged and left at its default."""
    data: dict[str, Any] = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "agents": [],
        "cron_jobs": [],
        "projects": [],
        "sites": [],
        "system": {},
        "openclaw": {},
    }

    config = openclaw.load_openclaw_config(config_path)
    if config:
        try:
            data["agents"] = collect_agents(config)
            data["openclaw"] = collect_openclaw_info(config, tz_name)
        except (AttributeError, TypeError) as exc:
            logger.error("Failed to read OpenClaw config: %s", exc)

    try:
        data["cron_jobs"] = read_cron_jobs(cron_snapshot_path)
    except (OSError, ValueError) as exc:
        logger.error("Failed to read cron snapshot: %s", exc)

    try:
        data["projects"], data["sites"] = read_projects(projects_path)
    except (OSError, ValueError, AttributeError, KeyError) as exc:
        logger.error("Failed to read projects.json: %s", exc)

    try:
        sampler = sampler or MetricsSampler(cpu_window=settings.cpu_sample_window)
        data["system"] = await collect_system_summary(sampler)
    except CollectionFailure as exc:
        logger.error("System info unavailable: %s", exc)

    try:
        gemini_usage = read_gemini_usage(gemini_usage_path, tz_name)
    except (OSError, ValueError, AttributeError) as exc:
        logger.error("Failed to read Gemini usage: %s", exc)
    else:
        if gemini_usage is not None:
            data["gemini_usage"] = gemini_usage

    return data


def write_dashboard_data(data: dict[str, Any], output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


# ── Main runner ──────────────────────────────────────


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    public_dir = Path(settings.public_dir)
    parser = argparse.ArgumentParser(description="Generate static dashboard data")
    parser.add_argument("--config", type=Path, default=Path(settings.openclaw_config_path))
    parser.add_argument("--public-dir", type=Path, default=public_dir)
    parser.add_argument("--cron-snapshot", type=Path, default=Path(settings.cron_snapshot_path))
    parser.add_argument("--gemini-usage", type=Path, default=Path(settings.gemini_usage_path))
    parser.add_argument("--timezone", default=settings.snapshot_timezone)
    parser.add_argument("--output", type=Path, help="Defaults to <public-dir>/dashboard-data.json")
    return parser.parse_args(argv)


async def generate(args: argparse.Namespace) -> Path:
    data = await build_dashboard_data(
        config_path=args.config,
        projects_path=args.public_dir / "projects.json",
        cron_snapshot_path=args.cron_snapshot,
        gemini_usage_path=args.gemini_usage,
        tz_name=args.timezone,
    )
    output = args.output or args.public_dir / "dashboard-data.json"
    write_dashboard_data(data, output)

    logger.info("Dashboard data generated: %s", output)
    logger.info("   Agents: %d", len(data["agents"]))
    logger.info("   Cron jobs: %d", len(data["cron_jobs"]))
    logger.info("   Projects: %d", len(data["projects"]))
    logger.info("   Sites: %d", len(data["sites"]))
    return output


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    asyncio.run(generate(_parse_args(argv)))


if __name__ == "__main__":
    main()
