"""
Observability Validator CLI
===========================

Main command-line interface for E2E validation.
"""

import click
import time

# Suppress urllib3 SSL warnings (Grafana routes use self-signed certs in test clusters)
import urllib3
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

from .clients.kubernetes import KubernetesClient
from .config import build_config
from .logging import log_error, log_info, set_log_level
from .phases import PHASES, PHASE_NAMES


def select_phases(phases: str, skip_cleanup: bool = False):
    """Resolve the --phases option to phase classes, keeping suite order."""
    if phases == 'all':
        wanted = list(PHASE_NAMES)
    else:
        wanted = [p.strip() for p in phases.split(',') if p.strip()]
        unknown = [p for p in wanted if p not in PHASE_NAMES]
        if unknown:
            raise click.BadParameter(
                f"unknown phase(s): {', '.join(unknown)} (choose from {', '.join(PHASE_NAMES)})",
                param_hint='--phases',
            )
    if skip_cleanup and 'cleanup' in wanted:
        wanted.remove('cleanup')
    return [p for p in PHASES if p.name in wanted]


def run_phases(phase_classes, k8s, config) -> dict:
    """Run phases in order; after the first failure the rest are skipped."""
    results = {}
    failed_phase = None

    for phase_cls in phase_classes:
        if failed_phase:
            results[phase_cls.name] = {
                'passed': False, 'skipped': True, 'reason': f'{failed_phase} failed'
            }
            continue

        results[phase_cls.name] = phase_cls(k8s, config).run()
        if not results[phase_cls.name]['passed']:
            log_error(f"\n❌ {phase_cls.name} failed - skipping remaining phases")
            failed_phase = phase_cls.name

    return results


def print_summary(results: dict, elapsed: float) -> bool:
    """Print the final summary and return overall pass/fail."""
    print("\n" + "="*70)
    print("FINAL SUMMARY")
    print("="*70)
    print(f"\nTotal Time: {elapsed:.1f}s ({elapsed/60:.1f} minutes)")

    phases_passed = sum(1 for r in results.values() if r.get('passed') and not r.get('skipped'))
    phases_skipped = sum(1 for r in results.values() if r.get('skipped'))

    print(f"\nPhases: {phases_passed}/{len(results)} passed", end="")
    if phases_skipped > 0:
        print(f" ({phases_skipped} skipped)")
    else:
        print()

    for phase_name, phase_result in results.items():
        if phase_result.get('skipped'):
            status = "⏭️ "
        elif phase_result.get('passed'):
            status = "✅"
        else:
            status = "❌"
        line = f"  {status} {phase_name}"
        if phase_result.get('failed_step'):
            line += f" - {phase_result['failed_step']} ({phase_result['failure_kind']})"
        print(line)

    passed = all(r.get('passed') for r in results.values())
    if passed:
        print("\n✅ OBSERVABILITY E2E PASSED")
    else:
        print("\n❌ OBSERVABILITY E2E FAILED")
    return passed


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option('--kubeconfig', envvar='KUBECONFIG', default=None, help='Path to the hub kubeconfig')
@click.option('--context', 'kube_context', default=None, help='Kubeconfig context of the hub cluster')
@click.option('--options', 'options_path', type=click.Path(exists=True, dir_okay=False),
              default=None, help='YAML options file')
@click.option('--interval', type=float, default=None, help='Polling interval (seconds)')
@click.option('--timeout', type=float, default=None, help='Default verification deadline (seconds)')
@click.option('--phases', default='all', help=f'Comma-separated phases or "all" ({",".join(PHASE_NAMES)})')
@click.option('--skip-cleanup', is_flag=True, help='Leave the MCO instance installed')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARN', 'ERROR'], case_sensitive=False),
              default=None, help='Override LOG_LEVEL')
@click.pass_context
def main(ctx, kubeconfig, kube_context, options_path, interval, timeout, phases,
         skip_cleanup, log_level):
    """
    E2E Validation Suite for the multicluster observability operator

    Phases run strictly in order; the first failure skips the rest.
    """
    if log_level:
        set_log_level(log_level)

    phase_classes = select_phases(phases, skip_cleanup)
    config = build_config(
        options_path,
        kubeconfig=kubeconfig,
        context=kube_context,
        interval=interval,
        timeout=timeout,
    )

    print("\n" + "="*70)
    print("  Observability E2E Validation Suite")
    print("="*70)
    print(f"\nConfiguration:")
    print(f"  Context:    {config.context or '(current)'}")
    print(f"  Namespace:  {config.mco_namespace}")
    print(f"  CR name:    {config.cr_name}")
    print(f"  Phases:     {', '.join(p.name for p in phase_classes)}")
    print(f"  Polling:    every {config.interval:g}s, deadline {config.timeout:g}s")
    print()

    start_time = time.time()
    exit_code = 0

    try:
        log_info("🔧 Initializing clients...")
        k8s = KubernetesClient(kubeconfig=config.kubeconfig, context=config.context)
        log_info("  ✓ Kubernetes client")

        results = run_phases(phase_classes, k8s, config)
        if not print_summary(results, time.time() - start_time):
            exit_code = 1

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        exit_code = 130
    except (click.exceptions.Exit, SystemExit):
        raise
    except Exception as e:
        log_error(f"\n\n❌ Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        exit_code = 1

    ctx.exit(exit_code)


if __name__ == '__main__':
    main()
