import sys
import logging
import functools
import click
from s3mini.config import load_config
from s3mini.auth import Dispatcher
from s3mini.bucket import BucketManager
from s3mini.objects import ObjectManager
from s3mini.errors import S3MiniError, ConfigurationError


def handle_errors(func):
    """Report client errors on stderr and exit non-zero."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(1)
        except S3MiniError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    return wrapper


def managers(ctx) -> dict:
    """Load the configuration on first use, so --help never needs credentials."""
    obj = ctx.find_root().obj
    if 'dispatcher' not in obj:
        conf = load_config(host=obj['host'], connect_timeout=obj['connect_timeout'])
        dispatcher = Dispatcher(conf, session=obj.get('session'))
        obj.update({
            'conf': conf,
            'dispatcher': dispatcher,
            'bucket_mgr': BucketManager(dispatcher),
            'object_mgr': ObjectManager(dispatcher)
        })
    return obj


@click.group(context_settings=dict(help_option_names=['-h', '--help']))
@click.option('--host', envvar='S3_HOST', default=None,
              help='S3 service host (default s3.amazonaws.com)')
@click.option('--timeout', 'connect_timeout', type=float, default=None,
              help='Connect timeout in seconds (default 10)')
@click.option('-v', '--verbose', count=True, help='-v for info, -vv for debug')
@click.pass_context
def cli(ctx, host, connect_timeout, verbose):
    """Minimal S3 client using v2 request signing.

    Credentials come from S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY.
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='[%(levelname)s] %(message)s', stream=sys.stderr)

    ctx.obj = {
        'host': host,
        'connect_timeout': connect_timeout,
        'session': (ctx.obj or {}).get('session')
    }


@cli.command('put')
@click.argument('bucket_name')
@click.argument('name', required=False)
@click.argument('local_file', required=False)
@click.pass_context
@handle_errors
def put_cmd(ctx, bucket_name, name, local_file):
    """Upload LOCAL_FILE (default NAME) as NAME, or create BUCKET_NAME."""
    managers(ctx)['object_mgr'].put(bucket_name, name, local_file)


@cli.command('get')
@click.argument('bucket_name')
@click.argument('name')
@click.argument('local_file', required=False)
@click.pass_context
@handle_errors
def get_cmd(ctx, bucket_name, name, local_file):
    """Download NAME into LOCAL_FILE (default NAME, '-' for stdout)."""
    managers(ctx)['object_mgr'].get(bucket_name, name, local_file)


@cli.command('rm')
@click.argument('bucket_name')
@click.argument('name')
@click.pass_context
@handle_errors
def rm_cmd(ctx, bucket_name, name):
    """Delete an object."""
    managers(ctx)['object_mgr'].delete(bucket_name, name)


@cli.command('ls')
@click.argument('bucket_name')
@click.option('--prefix', default='', help='Filter prefix')
@click.option('--marker', default='', help='List keys after this one')
@click.pass_context
@handle_errors
def ls_cmd(ctx, bucket_name, prefix, marker):
    """List the first page of keys in a bucket."""
    page = managers(ctx)['bucket_mgr'].list_objects(bucket_name, prefix=prefix, marker=marker)
    for key in page:
        click.echo(key)
    if page.truncated:
        click.echo(f"More keys available, continue with --marker '{page.next_marker}'", err=True)


@cli.command('test')
@click.argument('bucket_name')
@click.argument('name')
@click.pass_context
@handle_errors
def test_cmd(ctx, bucket_name, name):
    """Exit 0 if the object exists, 1 otherwise."""
    if not managers(ctx)['object_mgr'].test(bucket_name, name):
        sys.exit(1)


@cli.command('buckets')
@click.pass_context
@handle_errors
def buckets_cmd(ctx):
    """List all buckets."""
    for name in managers(ctx)['bucket_mgr'].list_buckets():
        click.echo(name)


@cli.command('rmrf')
@click.argument('bucket_name')
@click.pass_context
@handle_errors
def rmrf_cmd(ctx, bucket_name):
    """Delete every object of the first listing page of a bucket."""
    for key in managers(ctx)['bucket_mgr'].delete_all(bucket_name):
        click.echo(f"Deleted {key}")


if __name__ == '__main__':
    cli()
