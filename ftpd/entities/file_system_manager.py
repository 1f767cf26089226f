import os
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# PATH RESOLUTION
# =============================================================================

def resolve_path(current_directory, requested_path):
    """
    Resuelve una ruta pedida por el cliente contra el directorio actual.

    La normalización es puramente textual (colapsa '.' y '..'): no impide
    salir del directorio de trabajo del proceso.

    Returns:
        str: Ruta absoluta normalizada
    """
    return os.path.normpath(os.path.join(current_directory, requested_path))

def _parent_directory(path):
    return os.path.dirname(path.rstrip(os.sep)) or os.sep

def parent_is_writable(path):
    """True si el padre de `path` existe, es directorio y se puede escribir"""
    parent = _parent_directory(path)
    return os.path.isdir(parent) and os.access(parent, os.W_OK)

def quote_pathname(path):
    """Entre comillas dobles, duplicando las comillas internas (respuestas 257)"""
    return '"' + path.replace('"', '""') + '"'

def is_same_or_ancestor(path, other):
    """True si `path` es `other` o uno de sus directorios padre"""
    return os.path.commonpath([path, other]) == path

# =============================================================================
# FILE SYSTEM QUERIES
# =============================================================================

def file_exists(path):
    """Verifica si existe algo en `path` que no sea un directorio"""
    return os.path.exists(path) and not os.path.isdir(path)

def directory_exists(path):
    return os.path.isdir(path)

def get_file_size(path):
    """Tamaño en bytes o None si no existe / es directorio"""
    if not file_exists(path):
        return None
    try:
        return os.path.getsize(path)
    except OSError as e:
        logger.warning("Could not stat %s: %s", path, e)
        return None

# =============================================================================
# DIRECTORY LISTING
# =============================================================================

def get_file_info(path):
    """
    Obtiene la información necesaria para una línea de LIST.
    Retorna None si la entrada desapareció o no se puede leer.
    """
    try:
        stat = os.stat(path)
    except OSError as e:
        logger.warning("Skipping %s in listing: %s", path, e)
        return None

    is_dir = os.path.isdir(path)
    return {
        'name': os.path.basename(path),
        'type': "directory" if is_dir else "file",
        'size': 0 if is_dir else stat.st_size,
        'modified': stat.st_mtime,
    }

def list_directory_detailed(path):
    """
    Lista el contenido de un directorio en el orden que devuelve el sistema
    de archivos (sin ordenar).

    Returns:
        list[dict] con la info de cada entrada, o None si no es un directorio
    """
    if not os.path.isdir(path):
        return None

    entries = []
    with os.scandir(path) as it:
        for entry in it:
            file_info = get_file_info(entry.path)
            if file_info:
                entries.append(file_info)
    return entries

# ==============================================================================================
# FILE AND DIRECTORY OPERATIONS
# ==============================================================================================

def change_directory(current_directory, new_path):
    """Resuelve el nuevo directorio actual; None si no existe o no es directorio"""
    resolved = resolve_path(current_directory, new_path)
    if os.path.isdir(resolved):
        return resolved
    return None

def create_directory(path):
    """Crea un directorio si el padre es escribible y el destino no existe"""
    if not parent_is_writable(path):
        return False, "Parent directory does not exist or is not writable"

    if os.path.exists(path):
        return False, "Directory already exists"

    try:
        os.mkdir(path)
    except OSError as e:
        logger.warning("Error creating directory %s: %s", path, e)
        return False, f"Failed to create directory: {e.strerror or e}"

    return True, f"{quote_pathname(path)} directory created"

def remove_directory(path, current_directory=None):
    """Elimina un directorio vacío que no contenga al directorio actual de la sesión"""
    if not os.path.exists(path):
        return False, "Directory does not exist"

    if not os.path.isdir(path):
        return False, "Not a directory"

    if current_directory is not None and is_same_or_ancestor(path, current_directory):
        return False, "Cannot remove the current directory or one of its parents"

    if not parent_is_writable(path):
        return False, "Permission denied"

    try:
        if any(os.scandir(path)):
            return False, "Directory not empty"
        os.rmdir(path)
    except OSError as e:
        logger.warning("Error removing directory %s: %s", path, e)
        return False, f"Failed to remove directory: {e.strerror or e}"

    return True, f'"{path}" directory removed'

def delete_file(path):
    """Elimina un archivo regular"""
    if not os.path.exists(path):
        return False, "File not found"

    if not os.path.isfile(path):
        return False, "Not a regular file"

    if not parent_is_writable(path):
        return False, "Permission denied"

    try:
        os.remove(path)
    except OSError as e:
        logger.warning("Error deleting file %s: %s", path, e)
        return False, f"Failed to delete file: {e.strerror or e}"

    return True, f'"{path}" file deleted'

def check_rename_source(path):
    """Valida el origen de RNFR: debe existir y ser legible"""
    if not os.path.exists(path):
        return False, "File or directory not found"

    if not os.access(path, os.R_OK):
        return False, "Permission denied"

    return True, "File exists, ready for destination name"

def rename_path(old_path, new_path):
    """Renombra un archivo o directorio; el destino no debe existir"""
    if not parent_is_writable(new_path):
        return False, "Destination directory does not exist or is not writable"

    if os.path.exists(new_path):
        return False, "Destination path already exists"

    try:
        os.rename(old_path, new_path)
    except OSError as e:
        logger.warning("Error renaming %s to %s: %s", old_path, new_path, e)
        return False, f"Failed to rename: {e.strerror or e}"

    return True, f'"{old_path}" renamed to "{new_path}"'

def check_retrieve_target(path):
    """Valida el archivo a enviar en RETR"""
    if not os.path.exists(path):
        return False, "File not found"

    if os.path.isdir(path):
        return False, "Is a directory"

    return True, ""

def check_store_target(path):
    """Valida el destino de STOR: padre existente, directorio y escribible"""
    if not parent_is_writable(path):
        return False, "Invalid path: parent directory missing or not writable"

    if os.path.isdir(path):
        return False, "Invalid path: is a directory"

    return True, ""
