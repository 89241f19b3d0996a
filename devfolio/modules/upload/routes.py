from flask import request, jsonify
from devfolio.core import get_config_value, logger, UploadError
from devfolio.core.storage import upload_file
from devfolio.modules.auth import require_auth
from . import upload_bp


def read_image_upload(field='image'):
    """Validate the multipart image and return (bytes, filename, mimetype)"""
    file = request.files.get(field)
    if file is None or file.filename == '':
        raise UploadError('No file uploaded', 400)

    if not (file.mimetype or '').startswith('image/'):
        raise UploadError('Only image files are allowed', 400)

    max_bytes = int(get_config_value('UPLOAD_MAX_BYTES', 5 * 1024 * 1024))
    file_bytes = file.read(max_bytes + 1)
    if len(file_bytes) > max_bytes:
        raise UploadError('File too large', 413)

    return file_bytes, file.filename, file.mimetype


@upload_bp.route('/project-preview', methods=['POST'])
@require_auth
def upload_project_preview():
    """Upload project preview image"""
    try:
        file_bytes, filename, mimetype = read_image_upload()
        result = upload_file(file_bytes, filename, mimetype)
    except UploadError as e:
        if e.status_code >= 500:
            logger.error('upload', f"Cloudinary upload failed: {e.message}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('upload', e)
        return jsonify({'message': str(e) or 'Upload failed'}), 500

    logger.log_user_action('upload', f"Uploaded project preview {result['publicId']}")
    return jsonify(result)
