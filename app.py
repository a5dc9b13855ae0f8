import logging
import sys

import click
from flask import Flask

from challenge_routes import challenge_bp, EXTENSION_KEY
from settings import load_settings
from zkp.kzg4844.blob import Blob
from zkp.kzg4844.challenge import ChallengeContext, ChallengeService
from zkp.kzg4844.errors import ProviderError, ScalarGenerationError, StartupError
from zkp.kzg4844.kzg import SeededKZGProvider
from zkp.kzg4844.provider import CKZGProvider
from zkp.kzg4844.srs import SRS

logger = logging.getLogger(__name__)


def create_app(service=None):
    """Flask 앱을 만들고 ChallengeService를 주입한다.

    service가 None이면 /alive와 /admin/* 는 503을 돌려준다.
    """
    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = service
    app.register_blueprint(challenge_bp)
    return app


## Startup ##
def load_provider(settings):
    if settings.kzg_backend == "seeded":
        logger.warning(
            "Using the seeded KZG backend: the setup secret is known, proofs are forgeable"
        )
        return SeededKZGProvider(SRS.generate(seed=settings.kzg_setup_seed))
    return CKZGProvider.from_trusted_setup(
        settings.trusted_setup_path, settings.kzg_precompute
    )


def build_service(settings):
    """신뢰 설정을 로드하고 관리자 블롭을 유도한다.

    Raises:
        StartupError: 제공자 로드 또는 블롭 유도 실패
    """
    try:
        provider = load_provider(settings)
    except ProviderError as exc:
        raise StartupError(str(exc)) from exc
    logger.info("Loaded trusted setup")

    try:
        admin_blob = Blob.generate(settings.admin_seed)
    except ScalarGenerationError as exc:
        raise StartupError(f"failed to derive admin blob: {exc}") from exc
    logger.info("Init admin blob")

    context = ChallengeContext(admin_blob=admin_blob, provider=provider, flag=settings.flag)
    return ChallengeService(context)


@click.command()
@click.option("--port", type=int, default=None, help="listen port (overrides PORT)")
@click.option("--host", default=None, help="listen address (overrides HOST)")
def main(port, host):
    """KZG 위조 챌린지 서버를 실행한다."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    overrides = {}
    if port is not None:
        overrides["PORT"] = port
    if host is not None:
        overrides["HOST"] = host

    try:
        settings = load_settings(**overrides)
        logging.getLogger().setLevel(settings.log_level)
        service = build_service(settings)
    except StartupError as exc:
        logger.critical("Startup failed: %s", exc)
        sys.exit(1)

    app = create_app(service)
    logger.info("Starting server at port %d", settings.port)
    app.run(host=settings.host, port=settings.port, threaded=True)


if __name__ == "__main__":
    main()
