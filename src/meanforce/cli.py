import argparse
from pathlib import Path
import logging
from contextlib import ExitStack

from meanforce.core.atoms import AtomSet
from meanforce.errors import MeanForceError
from meanforce.io.mass_table import load_masses, check_mass_symmetry
from meanforce.io.writer import ForceSeriesWriter, ResultsWriter
from meanforce.session import MeanForceSession, resolve_inputs
from meanforce.utils.config_manager import ConfigManager

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Mean radial force and torque between two identical subunits from force trajectories.')
    parser.add_argument('files', nargs='*', help='Force trajectory files (ignored with --scan).')
    parser.add_argument('--config', type=str, help='Path to YAML configuration file.')
    parser.add_argument('-n', '--n-atoms', type=int, help='Total number of atoms in both subunits.')
    parser.add_argument('-m', '--use-mass', action='store_true', help='Weight geometry by atomic mass.')
    parser.add_argument('--psf', type=str, help='PSF topology file holding the atomic masses.')
    parser.add_argument('--scan', action='store_true', help='Scan a directory for block files.')
    parser.add_argument('--dir', type=str, help='Directory to scan (default: current directory).')
    parser.add_argument('--tail', type=str, help="Suffix of block files (default: '.fout.dat').")
    parser.add_argument('--per-file', action='store_true', help='Reset statistics for every file.')
    parser.add_argument('--corr', type=str, help='Write the per-frame radial force and torque series here.')
    parser.add_argument('--output-dir', type=str, help='Directory for JSON/YAML results and plots.')
    parser.add_argument('--plot', action='store_true', help='Plot the series (requires --corr and --output-dir).')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging.')
    return parser


def apply_overrides(cfg: ConfigManager, args: argparse.Namespace) -> None:
    updates = {'system': {}, 'input': {}, 'statistics': {}, 'output': {}}
    if args.n_atoms is not None: updates['system']['n_atoms'] = args.n_atoms
    if args.use_mass: updates['system']['use_mass'] = True
    if args.psf: updates['system']['psf_file'] = args.psf
    if args.files: updates['input']['files'] = list(args.files)
    if args.scan: updates['input']['scan'] = True
    if args.dir: updates['input']['directory'] = args.dir
    if args.tail: updates['input']['tail'] = args.tail
    if args.per_file: updates['statistics']['pooled'] = False
    if args.corr: updates['output']['series_file'] = args.corr
    if args.output_dir: updates['output']['directory'] = args.output_dir
    if args.plot: updates['output']['plot'] = True
    cfg.update_config(updates)


def run(cfg: ConfigManager):
    sys_cfg, in_cfg, stat_cfg, align_cfg, out_cfg = (
        cfg.get_section('system'), cfg.get_section('input'), cfg.get_section('statistics'),
        cfg.get_section('alignment'), cfg.get_section('output'))

    masses = None
    if sys_cfg['use_mass']:
        masses = load_masses(sys_cfg['psf_file'], sys_cfg['n_atoms'])
        check_mass_symmetry(masses, sys_cfg['mass_tolerance'])
    atoms = AtomSet(sys_cfg['n_atoms'], masses)

    files = resolve_inputs(in_cfg.get('files'), in_cfg.get('directory'),
                           scan=in_cfg.get('scan', False), tail=in_cfg.get('tail', '.fout.dat'))

    with ExitStack() as stack:
        series_writer = None
        if out_cfg.get('series_file'):
            series_writer = stack.enter_context(ForceSeriesWriter(out_cfg['series_file']))
        session = MeanForceSession(atoms, pooled=stat_cfg['pooled'], series_writer=series_writer,
                                   negative_angle_threshold=align_cfg['negative_angle_threshold'])
        result = session.run(files)

    if out_cfg.get('directory'):
        writer = ResultsWriter(out_cfg['directory'])
        writer.save_config(cfg.to_dict())
        writer.save_summary(result.summary())
        if out_cfg.get('plot'):
            if out_cfg.get('series_file'):
                from meanforce.visualization.series_plotter import SeriesPlotter
                for plot_type in ('timeseries', 'histogram'):
                    SeriesPlotter.from_file(out_cfg['series_file'], plot_type,
                                            Path(out_cfg['directory']) / f"force_{plot_type}.png").generate_plot()
            else:
                logger.warning("Plotting needs the per-frame series; pass --corr.")
    return result


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        cfg = ConfigManager(args.config)
        apply_overrides(cfg, args)
        cfg.validate()
        run(cfg)
        logger.info("Mean force processing completed.")
    except FileNotFoundError as e: logger.error(f"File Error: {e}"); raise SystemExit(1)
    except ValueError as e: logger.error(f"Value Error: {e}"); raise SystemExit(1)
    except MeanForceError as e: logger.error(f"{type(e).__name__}: {e}"); raise SystemExit(1)
    except Exception as e: logger.error(f"Unexpected error: {e}", exc_info=True); raise SystemExit(1)


if __name__ == "__main__":
    main()
