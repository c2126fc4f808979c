# server.py
from fastapi import FastAPI, UploadFile, File, Form, HTTPException
import shutil
import tempfile
from typing import Optional
from pixel_scramble import utils
from main import scramble_image, descramble_image

app = FastAPI(title="Pixel Scrambler")


def _save_upload(file: UploadFile) -> str:
    tf = tempfile.NamedTemporaryFile(delete=False, suffix=".png")
    with tf as out:
        shutil.copyfileobj(file.file, out)
    return tf.name


@app.post("/scramble")
def api_scramble(file: UploadFile = File(...), seed: Optional[int] = Form(None)):
    src = _save_upload(file)
    out_path = src[:-len(".png")] + "_scrambled.png"
    if seed is None:
        seed = utils.RANDOM_SEED
    if not utils.INT64_MIN <= seed <= utils.INT64_MAX:
        raise HTTPException(status_code=422, detail="seed out of 64-bit range")
    try:
        num = scramble_image(src, seed, out_path)
    except utils.ImageIOError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"scrambled_path": out_path, "seed": num}


@app.post("/descramble")
def api_descramble(file: UploadFile = File(...)):
    src = _save_upload(file)
    out_path = src[:-len(".png")] + "_descrambled.png"
    try:
        descramble_image(src, out_path)
    except utils.ImageIOError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"descrambled_path": out_path}
