from nanoid import generate

def generate_unique_id(length=21):
  return generate(size=length)
