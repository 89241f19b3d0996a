"""
Storage Utility
===============

Image uploads proxied to Cloudinary's signed upload API.
"""

import hashlib
import time
import requests
from .config import get_config_value
from .errors import UploadError
from .logging_service import logger

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"

# Project previews are cropped to the Open Graph card size
PREVIEW_TRANSFORMATION = "c_fill,w_1200,h_630/q_auto/f_auto"


def get_cloudinary_config():
    """Get Cloudinary credentials"""
    return {
        'cloud_name': get_config_value('CLOUDINARY_CLOUD_NAME'),
        'api_key': get_config_value('CLOUDINARY_API_KEY'),
        'api_secret': get_config_value('CLOUDINARY_API_SECRET'),
        'folder': get_config_value('CLOUDINARY_FOLDER', 'Devfolio/assets'),
    }


def sign_params(params, api_secret):
    """Cloudinary signature: sha1 of the sorted key=value pairs followed by the secret."""
    to_sign = '&'.join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ''))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode('utf-8')).hexdigest()


def upload_file(file_bytes, filename, content_type, transformation=PREVIEW_TRANSFORMATION):
    """Upload an image to Cloudinary.

    Args:
        file_bytes: Raw bytes of the image.
        filename: Original filename, forwarded for Cloudinary's metadata.
        content_type: MIME type of the upload.
        transformation: Incoming transformation applied before storage.

    Returns:
        dict with ``url`` (secure URL) and ``publicId``.

    Raises:
        UploadError: credentials missing or Cloudinary rejected the upload.
    """
    config = get_cloudinary_config()
    if not all([config['cloud_name'], config['api_key'], config['api_secret']]):
        raise UploadError('Cloudinary is not configured')

    params = {
        'folder': config['folder'],
        'timestamp': int(time.time()),
        'transformation': transformation,
    }
    params['signature'] = sign_params(params, config['api_secret'])
    params['api_key'] = config['api_key']

    try:
        response = requests.post(
            CLOUDINARY_UPLOAD_URL.format(cloud_name=config['cloud_name']),
            data=params,
            files={'file': (filename, file_bytes, content_type)},
            timeout=30,
        )
    except requests.RequestException as e:
        raise UploadError(f"Upload failed: {e}")

    logger.log_api_call('upload', 'cloudinary/image/upload', 'POST', response.status_code)

    try:
        body = response.json()
    except ValueError:
        body = {}
    if response.status_code != 200:
        message = body.get('error', {}).get('message') if isinstance(body.get('error'), dict) else None
        raise UploadError(message or f"Upload failed: HTTP {response.status_code}")

    return {
        'url': body.get('secure_url'),
        'publicId': body.get('public_id'),
    }
